from typing import Any

from pydantic import BaseModel, field_validator


class ContactSubmission(BaseModel):
    """Contact form body as received.

    Every field is optional here; required-field and email checks live in
    the route so they can answer with the form's own 400 messages.
    ``phone`` is never checked: any non-null value is kept as text.
    """

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    message: str | None = None

    @field_validator("phone", mode="before")
    @classmethod
    def _phone_as_text(cls, value: Any) -> str | None:
        return None if value is None else str(value)


class ContactResponse(BaseModel):
    success: bool
    message: str
