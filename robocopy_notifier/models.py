from __future__ import annotations
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .errors import RequestDecodeError


class WebhookEvent(BaseModel):
    """Result of a Robocopy run, as posted by the job's PowerShell wrapper."""

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True, extra="ignore")

    status: str = ""
    timestamp: str = ""
    source: str = ""
    destination: str = ""
    exit_code: int = Field(default=0, alias="exitCode")
    # Pre-formatted email text, including a "Subject: ..." line
    email_content: str = Field(default="", alias="emailContent")

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_zero_value(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


def decode_event(body: bytes) -> WebhookEvent:
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise RequestDecodeError(f"invalid JSON: {exc}") from exc

    if data is None:
        return WebhookEvent()
    if not isinstance(data, dict):
        raise RequestDecodeError(f"expected a JSON object, got {type(data).__name__}")

    try:
        return WebhookEvent.model_validate(data)
    except ValidationError as exc:
        raise RequestDecodeError(str(exc)) from exc
