"""
Load monitor config from config.yaml, with environment variables taking precedence.
"""
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = "config.yaml"
BADGE_PAGE_SIZES = (10, 25, 50, 100)

# env var -> config key
ENV_OVERRIDES = {
    "ROBLOX_USER_ID": "user_id",
    "DISCORD_WEBHOOK_URL": "webhook_url",
    "CHECK_INTERVAL": "check_interval",
    "BADGE_LIMIT": "badge_limit",
    "HOST": "host",
    "PORT": "port",
    "LOG_LEVEL": "log_level",
}


class MonitorConfig(BaseModel):
    user_id: int = 8213751331
    webhook_url: str | None = None
    check_interval: float = Field(default=300.0, gt=0)
    badge_limit: int = 10
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"

    @field_validator("webhook_url", mode="before")
    @classmethod
    def _empty_url_is_unset(cls, value: object) -> object:
        return value or None

    @field_validator("badge_limit")
    @classmethod
    def _supported_page_size(cls, value: int) -> int:
        # the badges API only accepts these page sizes
        if value not in BADGE_PAGE_SIZES:
            raise ValueError(f"badge_limit must be one of {BADGE_PAGE_SIZES}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        valid = {"debug", "info", "warning", "error"}
        if value.lower() not in valid:
            raise ValueError(f"Invalid log level: {value}. Must be one of {sorted(valid)}")
        return value.lower()


def load_config(
    path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> MonitorConfig:
    """Load config from path (default $MONITOR_CONFIG or config.yaml) and apply env overrides.

    A missing file is not an error; every field has a default.
    """
    env = os.environ if environ is None else environ
    path = Path(path or env.get("MONITOR_CONFIG", DEFAULT_CONFIG_PATH))
    raw: dict = {}
    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
    for var, key in ENV_OVERRIDES.items():
        if var in env:
            raw[key] = env[var]
    return MonitorConfig(**raw)


if __name__ == "__main__":
    cfg = load_config()
    print("Loaded config:")
    for key, value in cfg.model_dump().items():
        print(f"  {key}: {value}")
