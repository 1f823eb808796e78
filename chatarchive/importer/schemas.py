"""Pydantic schemas for the import API."""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Response(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImportResult(_Response):
    id: str
    title: str
    message_count: int
    status: Literal["created", "updated"]


class ImportResponse(_Response):
    imported: int
    created: int
    updated: int
    results: list[ImportResult]
