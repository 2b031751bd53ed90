from __future__ import annotations
import ipaddress
import logging
import smtplib
from email.message import EmailMessage

from .config import SMTP_ENV_VARS, SmtpConfig
from .errors import ConfigurationError, SendError

logger = logging.getLogger(__name__)

MISSING_CONFIG_MESSAGE = (
    "SMTP configuration missing in .env or environment variables. "
    "Please check " + ", ".join(SMTP_ENV_VARS)
)


def _is_loopback(host: str) -> bool:
    if host.lower() == "localhost":
        return True
    try:
        return ipaddress.ip_address(host.strip("[]")).is_loopback
    except ValueError:
        return False


def build_message(config: SmtpConfig, subject: str, body: str) -> EmailMessage:
    """
    Build a single-part text/plain UTF-8 message.

    The body text is kept as-is; when the message is flattened for SMTP its
    line endings become CRLF and non-ASCII headers are RFC 2047 encoded.
    """
    msg = EmailMessage()
    msg["From"] = config.sender_address
    msg["To"] = config.recipient_address
    # Header values may not contain line breaks
    msg["Subject"] = " ".join(subject.splitlines())
    msg.set_content(body, charset="utf-8")
    return msg


class Notifier:
    """Sends notification emails through the configured SMTP relay.

    One call to send() opens one connection, logs in and submits one message.
    There is no retry; the caller decides what to do with a failure.
    """

    def __init__(self, config: SmtpConfig) -> None:
        self._config = config

    def send(self, subject: str, body: str) -> None:
        config = self._config

        missing = config.missing_fields()
        if missing:
            logger.error(
                "smtp_config_missing",
                extra={"missing": missing, "expected": list(SMTP_ENV_VARS)},
            )
            raise ConfigurationError(MISSING_CONFIG_MESSAGE, missing=missing)

        try:
            port = int(config.port)
        except ValueError as exc:
            raise ConfigurationError(f"SMTP_PORT must be a number, got {config.port!r}") from exc

        msg = build_message(config, subject, body)

        logger.info(
            "email_send_attempt",
            extra={
                "sender": config.sender_address,
                "recipient": config.recipient_address,
                "smtp_address": config.address,
            },
        )
        try:
            with smtplib.SMTP(config.host, port) as smtp:
                self._deliver(smtp, msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise SendError(f"failed to send email: {exc}") from exc

        logger.info("email_sent", extra={"recipient": config.recipient_address, "subject": subject})

    def _deliver(self, smtp: smtplib.SMTP, msg: EmailMessage) -> None:
        config = self._config

        smtp.ehlo()
        encrypted = False
        if smtp.has_extn("starttls"):
            smtp.starttls()
            smtp.ehlo()
            encrypted = True

        if not smtp.has_extn("auth"):
            raise smtplib.SMTPNotSupportedError("SMTP AUTH extension not supported by server.")
        # Credentials go in cleartext only to a relay on this machine
        if not encrypted and not _is_loopback(config.host):
            raise smtplib.SMTPException("refusing to authenticate over an unencrypted connection")

        smtp.login(config.username, config.password)
        smtp.send_message(msg, from_addr=config.sender_address, to_addrs=[config.recipient_address])
