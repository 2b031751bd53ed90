from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_ENV_FILE = ".env"
DEFAULT_LOG_LEVEL = "INFO"

# Environment variable names, in the order they are reported when missing
SMTP_ENV_VARS = (
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USERNAME",
    "SMTP_PASSWORD",
    "SENDER_EMAIL",
    "RECIPIENT_EMAIL",
)


def _parse_port(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        port = int(raw.strip())
        if port <= 0 or port > 65535:
            raise ValueError
        return port
    except ValueError:
        # Fallback to default if malformed
        logger.warning("invalid_port_setting", extra={"variable": name, "value": raw, "default": default})
        return default


def _parse_log_level(raw: str) -> str:
    name = raw.strip().upper()
    # getLevelName maps known names to their int level, anything else to a string
    if isinstance(logging.getLevelName(name), int):
        return name
    logger.warning("invalid_log_level_setting", extra={"value": raw, "default": DEFAULT_LOG_LEVEL})
    return DEFAULT_LOG_LEVEL


class SmtpConfig(BaseModel):
    """Connection settings for the outbound SMTP relay.

    Every field is required for a send; empty strings mean "not configured".
    """

    model_config = ConfigDict(frozen=True)

    host: str = ""
    port: str = ""
    username: str = ""
    password: str = ""
    sender_address: str = ""
    recipient_address: str = ""

    @classmethod
    def from_env(cls) -> "SmtpConfig":
        return cls(
            host=os.getenv("SMTP_HOST", ""),
            port=os.getenv("SMTP_PORT", ""),
            username=os.getenv("SMTP_USERNAME", ""),
            password=os.getenv("SMTP_PASSWORD", ""),
            sender_address=os.getenv("SENDER_EMAIL", ""),
            recipient_address=os.getenv("RECIPIENT_EMAIL", ""),
        )

    def missing_fields(self) -> List[str]:
        values = (
            self.host,
            self.port,
            self.username,
            self.password,
            self.sender_address,
            self.recipient_address,
        )
        return [name for name, value in zip(SMTP_ENV_VARS, values) if not value]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"


class Settings:
    def __init__(
        self,
        smtp: Optional[SmtpConfig] = None,
        port: Optional[int] = None,
        host: Optional[str] = None,
        log_level: Optional[str] = None,
        env_file: Optional[str] = None,
    ) -> None:
        # HTTP listener
        self.port: int = port if port is not None else _parse_port("PORT", DEFAULT_PORT)
        self.host: str = host if host is not None else os.getenv("HOST", "0.0.0.0")

        self.log_level: str = _parse_log_level(log_level or os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL))
        self.env_file: str = env_file or os.getenv("ENV_FILE", DEFAULT_ENV_FILE)

        # SMTP relay used by the notifier
        self.smtp: SmtpConfig = smtp if smtp is not None else SmtpConfig.from_env()

    @classmethod
    def from_env(cls) -> "Settings":
        return cls()


def load_env_file(path: str = DEFAULT_ENV_FILE) -> bool:
    """
    Load variables from a local env file into the process environment.

    Variables already present in the environment win over the file. A missing
    file is not an error: the process environment is used as-is.

    Returns:
        True if the file was found and loaded, False otherwise.
    """
    env_path = Path(path)
    if not env_path.is_file():
        logger.warning(
            "env_file_not_found",
            extra={"path": str(env_path), "fallback": "using process environment variables"},
        )
        return False
    load_dotenv(env_path, override=False)
    logger.info("env_file_loaded", extra={"path": str(env_path)})
    return True


def load_settings(env_file: Optional[str] = None) -> Settings:
    path = env_file or os.getenv("ENV_FILE", DEFAULT_ENV_FILE)
    load_env_file(path)
    return Settings(env_file=path)
