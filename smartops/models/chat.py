"""Push-channel envelope and chat payloads."""

from typing import Any

from pydantic import BaseModel, Field


class ChannelEvent(BaseModel):
    """Envelope for every frame on the push channel, in both directions."""

    event: str = Field(min_length=1)
    data: Any = None


class ChatQuery(BaseModel):
    query: str


class ChatReply(BaseModel):
    text: str
