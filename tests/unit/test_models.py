import pytest
from pydantic import ValidationError

from robocopy_notifier.errors import RequestDecodeError
from robocopy_notifier.models import WebhookEvent, decode_event


def test_decode_event_full_payload():
    body = (
        b'{"status":"fail","timestamp":"2024-05-01T02:00:00Z","source":"D:\\\\data",'
        b'"destination":"\\\\\\\\nas\\\\backup","exitCode":8,"emailContent":"Subject: X\\nBody"}'
    )
    event = decode_event(body)
    assert event.status == "fail"
    assert event.timestamp == "2024-05-01T02:00:00Z"
    assert event.source == "D:\\data"
    assert event.destination == "\\\\nas\\backup"
    assert event.exit_code == 8
    assert event.email_content == "Subject: X\nBody"


def test_decode_event_missing_fields_default_to_zero_values():
    event = decode_event(b"{}")
    assert event == WebhookEvent()
    assert event.status == ""
    assert event.exit_code == 0
    assert event.email_content == ""


def test_decode_event_null_fields_default_to_zero_values():
    event = decode_event(b'{"status": null, "exitCode": null, "emailContent": null}')
    assert event.status == ""
    assert event.exit_code == 0
    assert event.email_content == ""


def test_decode_event_top_level_null_is_empty_event():
    assert decode_event(b"null") == WebhookEvent()


def test_decode_event_ignores_unknown_fields():
    event = decode_event(b'{"status":"ok","retries":3,"nested":{"a":1}}')
    assert event.status == "ok"
    assert not hasattr(event, "retries")


@pytest.mark.parametrize(
    "body",
    [
        b"",
        b"not json",
        b"{\"status\": ",
        b"[1, 2, 3]",
        b"\"a string\"",
        b"42",
        b'{"exitCode": "eight"}',
        b'{"exitCode": 1.5}',
        b'{"exitCode": true}',
        b'{"status": 5}',
        b'{"emailContent": ["line"]}',
        b"\xc3\x28",
    ],
)
def test_decode_event_rejects_malformed_bodies(body):
    with pytest.raises(RequestDecodeError):
        decode_event(body)


def test_webhook_event_is_immutable():
    event = WebhookEvent(status="fail")
    with pytest.raises(ValidationError):
        event.status = "ok"


def test_webhook_event_accepts_python_names():
    event = WebhookEvent(exit_code=3, email_content="text")
    assert event.exit_code == 3
    assert event.email_content == "text"
