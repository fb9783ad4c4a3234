"""
Messaging Endpoints
/api/v1/messages/* routes (polling clients)
"""
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from application.services.messaging import IMessagingService
from presentation.api.v1.container import get_messaging_service
from presentation.api.v1.dependencies import get_current_user_id, parse_id
from presentation.api.v1.schemas.message import (
    ConversationResponse,
    MessageResponse,
    SendMessageRequest,
    UnreadCountResponse,
)


router = APIRouter()


@router.get("/conversations", response_model=List[ConversationResponse])
async def list_conversations(
    user_id: UUID = Depends(get_current_user_id),
    messaging_service: IMessagingService = Depends(get_messaging_service)
):
    conversations = await messaging_service.conversations(user_id)
    return [ConversationResponse.from_entity(c) for c in conversations]


@router.get("/conversation/{other_user_id}", response_model=List[MessageResponse])
async def get_conversation(
    other_user_id: str,
    user_id: UUID = Depends(get_current_user_id),
    messaging_service: IMessagingService = Depends(get_messaging_service)
):
    """Full exchange with another user; their messages are marked read"""
    messages = await messaging_service.conversation(user_id, parse_id(other_user_id, "User"))
    return [MessageResponse.from_entity(m) for m in messages]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    user_id: UUID = Depends(get_current_user_id),
    messaging_service: IMessagingService = Depends(get_messaging_service)
):
    return UnreadCountResponse(unread_count=await messaging_service.unread_count(user_id))


@router.post("/{receiver_id}", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    receiver_id: str,
    payload: SendMessageRequest,
    user_id: UUID = Depends(get_current_user_id),
    messaging_service: IMessagingService = Depends(get_messaging_service)
):
    message = await messaging_service.send(user_id, parse_id(receiver_id, "User"), payload.content or "")
    return MessageResponse.from_entity(message)
