"""Normalized conversation records.

These are the shapes persisted by the store and served by the API. JSON
output uses camelCase keys so files written by earlier file-backed stores
load unchanged.
"""

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Message(_CamelModel):
    id: str
    role: Literal["user", "assistant"] = Field(
        validation_alias=AliasChoices("role", "author"),
    )
    content: str
    created_at: datetime | None = None  # None when the export carried no usable timestamp


class ConversationSummary(_CamelModel):
    """A record without its message bodies, as returned by list views."""

    id: str
    title: str
    summary: str
    date_started: str | None = None  # YYYY-MM-DD, UTC
    date_ended: str | None = None
    source_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Conversation(ConversationSummary):
    messages: list[Message] = Field(default_factory=list)
