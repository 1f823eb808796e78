"""FastAPI routes for conversation CRUD."""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from chatarchive.conversations.schemas import (
    ConversationListResponse,
    CreateConversationRequest,
    PatchConversationRequest,
)
from chatarchive.conversations.service import (
    ConversationService,
    InvalidConversationError,
)
from chatarchive.conversations.store import ConversationNotFoundError
from chatarchive.models import Conversation

router = APIRouter(prefix="/api/conversations", tags=["conversations"])


def get_conversation_service() -> ConversationService:
    """Dependency placeholder, replaced at app startup."""
    raise RuntimeError("ConversationService not initialized")


@router.get("")
async def list_conversations(
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationListResponse:
    return ConversationListResponse(conversations=await service.list_conversations())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_conversation(
    request: CreateConversationRequest,
    service: ConversationService = Depends(get_conversation_service),
) -> Conversation:
    try:
        return await service.create_conversation(request)
    except InvalidConversationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all_conversations(
    service: ConversationService = Depends(get_conversation_service),
) -> Response:
    await service.delete_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{conversation_id}")
async def get_conversation(
    conversation_id: str,
    service: ConversationService = Depends(get_conversation_service),
) -> Conversation:
    try:
        return await service.get_conversation(conversation_id)
    except ConversationNotFoundError:
        raise HTTPException(
            status_code=404, detail=f"Conversation not found: {conversation_id}"
        )


@router.patch("/{conversation_id}")
async def update_conversation(
    conversation_id: str,
    request: PatchConversationRequest,
    service: ConversationService = Depends(get_conversation_service),
) -> Conversation:
    try:
        return await service.update_conversation(conversation_id, request)
    except ConversationNotFoundError:
        raise HTTPException(
            status_code=404, detail=f"Conversation not found: {conversation_id}"
        )
    except InvalidConversationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{conversation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_conversation(
    conversation_id: str,
    service: ConversationService = Depends(get_conversation_service),
) -> Response:
    try:
        await service.delete_conversation(conversation_id)
    except ConversationNotFoundError:
        raise HTTPException(
            status_code=404, detail=f"Conversation not found: {conversation_id}"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
