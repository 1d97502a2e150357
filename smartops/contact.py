"""
Contact submission delivery.

The site only promises to log submissions. Actual delivery (email, CRM,
ticketing) is an external collaborator; when ``CONTACT_WEBHOOK_URL`` is
set the dispatcher POSTs each accepted submission there as JSON.
"""

import logging
from datetime import datetime, timezone

import requests

from smartops.config import CONTACT_WEBHOOK_TIMEOUT_SECONDS, CONTACT_WEBHOOK_URL
from smartops.models import ContactSubmission

logger = logging.getLogger("contact")


class ContactDispatcher:
    """
    Forwards accepted contact submissions to a webhook.

    Args:
        webhook_url: Where to POST submissions. ``None`` disables delivery.
        timeout: HTTP request timeout in seconds.
    """

    def __init__(self, webhook_url: str | None = None, timeout: float = 5.0):
        self.webhook_url = webhook_url
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def _build_payload(self, submission: ContactSubmission) -> dict:
        return {
            "name": submission.name,
            "email": submission.email,
            "phone": submission.phone,
            "message": submission.message,
            "received_at": datetime.now(timezone.utc).isoformat(),
        }

    def dispatch(self, submission: ContactSubmission) -> bool:
        """Deliver *submission*. Failures are logged, never raised.

        Runs as a background task after the response has been sent.

        Returns:
            ``True`` if the webhook accepted the submission.
        """
        if not self.enabled:
            logger.debug("Contact delivery not configured; %s kept in logs only", submission.email)
            return False

        try:
            response = requests.post(
                self.webhook_url,
                json=self._build_payload(submission),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            logger.warning("Contact webhook POST failed: %s", exc)
            return False

        logger.info("Contact from %s forwarded to webhook", submission.email)
        return True


_dispatcher = None


def get_contact_dispatcher() -> ContactDispatcher:
    """Lazy-load the process-wide dispatcher (FastAPI dependency)."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = ContactDispatcher(
            CONTACT_WEBHOOK_URL, timeout=CONTACT_WEBHOOK_TIMEOUT_SECONDS
        )
        logger.info(
            "ContactDispatcher loaded (webhook %s)",
            "enabled" if _dispatcher.enabled else "disabled",
        )
    return _dispatcher
