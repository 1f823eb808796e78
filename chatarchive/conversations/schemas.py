"""Request and response schemas for conversation endpoints."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from chatarchive.models import ConversationSummary

# -- Requests --


class _Request(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )


class CreateConversationRequest(_Request):
    title: str = ""
    summary: str = ""
    date_started: str = ""
    date_ended: str = ""
    source_id: str = ""


class PatchConversationRequest(_Request):
    """Fields to update on a conversation. Only fields present in the request body are changed."""

    title: str | None = None
    summary: str | None = None
    date_started: str | None = None
    date_ended: str | None = None


# -- Responses --


class ConversationListResponse(BaseModel):
    conversations: list[ConversationSummary]
