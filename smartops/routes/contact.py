"""
Contact form endpoint.

  POST /api/contact: validate and accept a contact submission

Submissions are logged and handed to the ``ContactDispatcher`` as a
background task; nothing is persisted.
"""

import logging
import re

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from opentelemetry import trace

from smartops.contact import ContactDispatcher, get_contact_dispatcher
from smartops.models import ContactResponse, ContactSubmission
from smartops.telemetry import CONTACT_SUBMISSIONS

logger = logging.getLogger("contact")

router = APIRouter(prefix="/api", tags=["Contact"])

CONTACT_PATH = "/api/contact"

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

SUCCESS_MESSAGE = "Message sent successfully!"
MISSING_FIELDS_MESSAGE = "Please provide name, email, and message"
INVALID_EMAIL_MESSAGE = "Invalid email address"


def _rejection(outcome: str, message: str) -> JSONResponse:
    CONTACT_SUBMISSIONS.labels(outcome=outcome).inc()
    body = ContactResponse(success=False, message=message)
    return JSONResponse(status_code=400, content=body.model_dump())


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


@router.post(
    "/contact",
    response_model=ContactResponse,
    responses={400: {"model": ContactResponse}},
)
def submit_contact(
    submission: ContactSubmission,
    background_tasks: BackgroundTasks,
    dispatcher: ContactDispatcher = Depends(get_contact_dispatcher),
):
    """Accept a contact submission after checking required fields and email."""
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span("process contact submission") as span:
        if not (submission.name and submission.email and submission.message):
            span.set_attribute("contact.outcome", "missing_fields")
            return _rejection("missing_fields", MISSING_FIELDS_MESSAGE)

        if not is_valid_email(submission.email):
            span.set_attribute("contact.outcome", "invalid_email")
            return _rejection("invalid_email", INVALID_EMAIL_MESSAGE)

        span.set_attribute("contact.outcome", "accepted")
        logger.info(
            "New contact: %s (%s) - %s",
            submission.name,
            submission.email,
            submission.message,
        )
        background_tasks.add_task(dispatcher.dispatch, submission)

    CONTACT_SUBMISSIONS.labels(outcome="accepted").inc()
    return ContactResponse(success=True, message=SUCCESS_MESSAGE)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer unparseable contact bodies with the form's missing-fields 400.

    Every other route keeps FastAPI's default 422.
    """
    if request.url.path == CONTACT_PATH:
        logger.warning("Rejected unparseable contact body: %s", exc.errors()[:1])
        return _rejection("missing_fields", MISSING_FIELDS_MESSAGE)
    return await request_validation_exception_handler(request, exc)
