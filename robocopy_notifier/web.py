from __future__ import annotations
import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from .config import load_settings
from .errors import ConfigurationError, RequestDecodeError, SendError
from .logging import configure_json_logging
from .mailer import Notifier
from .models import decode_event
from .utils.subject import derive_subject


configure_json_logging()
settings = load_settings()
logging.getLogger().setLevel(settings.log_level)
logger = logging.getLogger(__name__)
app = FastAPI()


def handle_webhook(body: bytes, notifier: Notifier) -> JSONResponse:
    try:
        event = decode_event(body)
    except RequestDecodeError as exc:
        logger.warning("request_decode_failed", extra={"error": str(exc)})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Cannot parse request body"},
        )

    logger.info(
        "webhook_received",
        extra={
            "status": event.status,
            "exit_code": event.exit_code,
            "content_length": len(event.email_content.encode("utf-8")),
        },
    )

    subject = derive_subject(event.email_content)
    try:
        notifier.send(subject, event.email_content)
    except (ConfigurationError, SendError) as exc:
        logger.error("email_send_failed", extra={"error": str(exc), "error_type": type(exc).__name__})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to send email notification", "details": str(exc)},
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"message": "Webhook received and email sent successfully"},
    )


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/webhook/robocopy-failure")
async def robocopy_failure_webhook(request: Request):
    body = await request.body()
    notifier = Notifier(settings.smtp)
    # SMTP is blocking; keep it off the event loop
    return await run_in_threadpool(handle_webhook, body, notifier)
