"""
Configuration management.

Zaim credentials come from a YAML file, with environment variables taking
precedence. Nothing here persists tokens: the access-token pair is read, never
written back.
"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import ConfigurationError


@dataclass
class ZaimConfig:
    """Zaim consumer identity and optional pre-provisioned access token."""

    consumer_key: str = ""
    consumer_secret: str = ""
    callback_url: str | None = None
    access_token: str | None = None
    access_token_secret: str | None = None
    # Request timeout (seconds)
    timeout: int = 30

    @property
    def is_pre_authorized(self) -> bool:
        return bool(self.access_token) and bool(self.access_token_secret)

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.consumer_key:
            errors.append("consumer_key is required")
        if not self.consumer_secret:
            errors.append("consumer_secret is required")

        if bool(self.access_token) != bool(self.access_token_secret):
            errors.append("access_token and access_token_secret must be set together")
        elif not self.is_pre_authorized and not self.callback_url:
            errors.append("callback_url is required when no access token is configured")

        if self.timeout <= 0:
            errors.append("timeout must be positive")

        return errors


def load_config(config_path: Path) -> ZaimConfig:
    """
    Load configuration from YAML file.

    Environment variables can override config values:
    - ZAIM_CONSUMER_KEY
    - ZAIM_CONSUMER_SECRET
    - ZAIM_CALLBACK_URL
    - ZAIM_ACCESS_TOKEN
    - ZAIM_ACCESS_TOKEN_SECRET
    - ZAIM_TIMEOUT (request timeout in seconds)
    """
    if config_path.exists():
        with open(config_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    else:
        data = {}

    zaim_data = data.get("zaim", {}) or {}

    timeout_raw = os.environ.get("ZAIM_TIMEOUT", zaim_data.get("timeout", 30))
    try:
        timeout = int(timeout_raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid timeout: {timeout_raw!r}") from e

    return ZaimConfig(
        consumer_key=os.environ.get("ZAIM_CONSUMER_KEY", zaim_data.get("consumer_key", "")),
        consumer_secret=os.environ.get(
            "ZAIM_CONSUMER_SECRET", zaim_data.get("consumer_secret", "")
        ),
        callback_url=os.environ.get("ZAIM_CALLBACK_URL", zaim_data.get("callback_url")),
        access_token=os.environ.get("ZAIM_ACCESS_TOKEN", zaim_data.get("access_token")),
        access_token_secret=os.environ.get(
            "ZAIM_ACCESS_TOKEN_SECRET", zaim_data.get("access_token_secret")
        ),
        timeout=timeout,
    )


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# Zaim API client configuration
#
# Register an application at https://dev.zaim.net to obtain a consumer key.
# Either set callback_url (to run the authorization handshake) or both
# access_token and access_token_secret (to use an already authorized account).

zaim:
  consumer_key: "YOUR_CONSUMER_KEY"
  consumer_secret: "YOUR_CONSUMER_SECRET"
  callback_url: "oob"                      # OAuth callback URL
  access_token: null                       # Set after running `zaim-client authorize`
  access_token_secret: null
  timeout: 30                              # Request timeout (seconds)
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)
