"""
CLI tests: sign, verify and invite subcommands.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.adapters.clock import FrozenClock
from src.app_shell.cli import main, parse_params

GOLDEN_URL = (
    "https://example.com/invitation?expires=1700003600&hash=abc&id=42"
    "&signature=91c53aae6c92813cc851145e89732619b6da4e4003ba357f0235636026ac402e"
)


@pytest.fixture
def config_path(tmp_path: Path) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(
        "secret_key: s3cr3t\n"
        "frontend_url: https://example.com\n"
    )
    return str(path)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock.at_timestamp(1_700_000_000)


def test_parse_params() -> None:
    assert parse_params(["id=42", "q=a=b", "empty="]) == {"id": "42", "q": "a=b", "empty": ""}


def test_sign_prints_golden_url(
    config_path: str, clock: FrozenClock, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["--config", config_path, "sign", "id=42", "hash=abc", "--ttl", "3600"], clock)

    assert code == 0
    assert capsys.readouterr().out.strip() == GOLDEN_URL


def test_sign_rejects_reserved_key(config_path: str, clock: FrozenClock) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", config_path, "sign", "expires=1"], clock)
    assert exc_info.value.code == 2


def test_sign_rejects_bad_pair(config_path: str, clock: FrozenClock) -> None:
    with pytest.raises(SystemExit):
        main(["--config", config_path, "sign", "nonsense"], clock)


def test_verify_prints_params(
    config_path: str, clock: FrozenClock, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["--config", config_path, "verify", GOLDEN_URL], clock)

    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["hash=abc", "id=42"]


def test_verify_reports_expired(
    config_path: str, capsys: pytest.CaptureFixture[str]
) -> None:
    late = FrozenClock.at_timestamp(1_700_003_601)

    code = main(["--config", config_path, "verify", GOLDEN_URL], late)

    assert code == 1
    assert capsys.readouterr().err.startswith("link_expired")


def test_verify_reports_tampering(
    config_path: str, clock: FrozenClock, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["--config", config_path, "verify", GOLDEN_URL.replace("abc", "abd")], clock)

    assert code == 1
    assert capsys.readouterr().err.startswith("invalid_signature")


def test_invite_prints_link(
    config_path: str, clock: FrozenClock, capsys: pytest.CaptureFixture[str]
) -> None:
    code = main(["--config", config_path, "invite", "42", "ada@example.com"], clock)

    assert code == 0
    out = capsys.readouterr().out
    assert "Invitation sent to ada@example.com." in out
    assert "Link: https://example.com/invitation?expires=1700003600&hash=" in out


def test_config_from_env_when_file_missing(
    tmp_path: Path,
    clock: FrozenClock,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("APP_KEY", "s3cr3t")
    monkeypatch.setenv("URL_WEB_FRONTEND", "https://example.com")

    code = main(["--config", str(tmp_path / "missing.yaml"), "verify", GOLDEN_URL], clock)

    assert code == 0
    assert "id=42" in capsys.readouterr().out


def test_invalid_config_exits_with_usage_error(tmp_path: Path, clock: FrozenClock) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("secret_key: ''\nfrontend_url: https://example.com\n")

    assert main(["--config", str(path), "verify", GOLDEN_URL], clock) == 2
