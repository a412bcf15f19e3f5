import logging
import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from src.adapters.clock import SystemClock
from src.adapters.dev_email import DevEmailAdapter
from src.components.signed_links import SignedLinkService
from src.core.ports.email import EmailPort
from src.ports.clock import ClockPort
from src.rules.loader import load_config, load_config_from_env
from src.rules.models import LinkConfig

logger = logging.getLogger(__name__)


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.config_path = Path(os.environ.get("LINK_CONFIG_PATH", self.base_dir / "config.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Config ---
@lru_cache
def get_config() -> LinkConfig:
    settings = get_settings()
    if settings.config_path.exists():
        logger.info("Loading link config from %s", settings.config_path)
        return load_config(settings.config_path)

    logger.info("No config file at %s, reading environment", settings.config_path)
    return load_config_from_env()


# --- Adapters ---
@lru_cache
def get_clock() -> ClockPort:
    return SystemClock()


@lru_cache
def get_email_adapter() -> EmailPort:
    # Process-wide; keep no copies of sent links in memory or logs
    return DevEmailAdapter(
        default_sender=get_config().mail.sender(),
        log_body=False,
        max_stored=0,
    )


# --- Services ---
def get_link_service(
    config: LinkConfig = Depends(get_config),
    clock: ClockPort = Depends(get_clock),
) -> SignedLinkService:
    return SignedLinkService(config.to_link_settings(), clock)
