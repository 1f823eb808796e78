"""Raw shapes of a ChatGPT-style conversations.json export.

Only the fields the importer reads are declared; everything else in the
export is ignored. These objects live for the duration of one import run.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _ExportModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ExportAuthor(_ExportModel):
    role: str = ""

    @field_validator("role", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ExportContent(_ExportModel):
    content_type: str = ""
    parts: list[Any] = Field(default_factory=list)

    @field_validator("content_type", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("parts", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class ExportMessage(_ExportModel):
    id: str | None = None
    author: ExportAuthor = Field(default_factory=ExportAuthor)
    create_time: float | None = None
    update_time: float | None = None
    content: ExportContent = Field(default_factory=ExportContent)

    @field_validator("author", "content", mode="before")
    @classmethod
    def _none_to_default(cls, value: Any) -> Any:
        return {} if value is None else value


class ExportNode(_ExportModel):
    id: str | None = None
    parent: str | None = None
    children: list[Any] | None = None  # unused, traversal follows parent links
    message: ExportMessage | None = None

    @property
    def create_time(self) -> float | None:
        return self.message.create_time if self.message is not None else None


class ExportConversation(_ExportModel):
    id: str | None = None
    conversation_id: str | None = None
    title: str | None = None
    create_time: float | None = None
    update_time: float | None = None
    current_node: str | None = None
    mapping: dict[str, ExportNode] = Field(default_factory=dict)

    @field_validator("mapping", mode="before")
    @classmethod
    def _none_to_dict(cls, value: Any) -> Any:
        return {} if value is None else value

    def model_post_init(self, __context: Any) -> None:
        # Nodes without an id of their own are addressed by their mapping key.
        for key, node in self.mapping.items():
            if not node.id:
                node.id = key
