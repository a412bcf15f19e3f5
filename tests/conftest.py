import pytest

from src.rules.loader import ENV_OVERRIDES, MAIL_FROM_ENV, PREVIOUS_KEYS_ENV


@pytest.fixture(autouse=True)
def clean_link_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment from overriding test configs."""
    for name in (*ENV_OVERRIDES, PREVIOUS_KEYS_ENV, MAIL_FROM_ENV, "LINK_CONFIG_PATH"):
        monkeypatch.delenv(name, raising=False)
