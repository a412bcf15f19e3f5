import argparse
import logging
import sys
from pathlib import Path

from src.adapters.clock import SystemClock
from src.adapters.dev_email import DevEmailAdapter
from src.components.invite import (
    DefaultInviteMessageBuilder,
    Invitee,
    SendInviteInput,
    SignedInviteLinkBuilder,
    run_send_invite,
)
from src.components.signed_links import SignedLinkError, SignedLinkService
from src.ports.clock import ClockPort
from src.rules.loader import load_config, load_config_from_env
from src.rules.models import LinkConfig

logger = logging.getLogger("cli")

CONFIG_PATH = "config.yaml"


def get_config(path: str) -> LinkConfig:
    config_path = Path(path)
    if config_path.exists():
        return load_config(config_path)
    return load_config_from_env()


def parse_params(pairs: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got '{pair}'")
        params[key] = value
    return params


def handle_sign(service: SignedLinkService, args: argparse.Namespace) -> int:
    params = parse_params(args.params)
    print(service.generate(params, args.ttl))
    return 0


def handle_verify(service: SignedLinkService, args: argparse.Namespace) -> int:
    try:
        params = service.verify(args.url)
    except SignedLinkError as e:
        print(f"{e.code}: {e.message}", file=sys.stderr)
        return 1

    for key in sorted(params):
        print(f"{key}={params[key]}")
    return 0


def handle_invite(
    service: SignedLinkService,
    config: LinkConfig,
    args: argparse.Namespace,
) -> int:
    invitee = Invitee(id=args.invitee_id, email=args.email, name=args.name)
    out = run_send_invite(
        SendInviteInput(invitee=invitee, ttl_seconds=args.ttl),
        link_builder=SignedInviteLinkBuilder(service),
        message_builder=DefaultInviteMessageBuilder(),
        email=DevEmailAdapter(default_sender=config.mail.sender()),
        sender=config.mail.sender(),
    )
    if not out.success:
        logger.error("Invitation not sent: %s", out.error)
        return 1

    print(f"Invitation sent to {invitee.email}.")
    print(f"Link: {out.url}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Signed invitation links CLI")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to config YAML")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # sign
    sign_parser = subparsers.add_parser("sign", help="Generate a signed link")
    sign_parser.add_argument("params", nargs="*", help="Parameters as KEY=VALUE")
    sign_parser.add_argument("--ttl", type=int, help="Seconds until the link expires")

    # verify
    verify_parser = subparsers.add_parser("verify", help="Verify a signed link")
    verify_parser.add_argument("url", help="Link to verify")

    # invite
    invite_parser = subparsers.add_parser("invite", help="Send an invitation email")
    invite_parser.add_argument("invitee_id", help="Identifier of the invitee")
    invite_parser.add_argument("email", help="Email address of the invitee")
    invite_parser.add_argument("--name", help="Display name of the invitee")
    invite_parser.add_argument("--ttl", type=int, help="Seconds until the link expires")

    return parser


def main(argv: list[str] | None = None, clock: ClockPort | None = None) -> int:
    logging.basicConfig(level=logging.INFO)
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error("Config load failed: %s", e)
        return 2

    service = SignedLinkService(config.to_link_settings(), clock or SystemClock())

    try:
        if args.command == "sign":
            return handle_sign(service, args)
        elif args.command == "verify":
            return handle_verify(service, args)
        elif args.command == "invite":
            return handle_invite(service, config, args)
    except (argparse.ArgumentTypeError, SignedLinkError) as e:
        parser.error(str(e))

    return 2


if __name__ == "__main__":
    sys.exit(main())
