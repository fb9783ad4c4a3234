"""
Messaging Schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from domain.entities import Message, Conversation


class SendMessageRequest(BaseModel):
    content: Optional[str] = None


class MessageResponse(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    content: str
    is_read: bool
    timestamp: Optional[datetime] = None

    @classmethod
    def from_entity(cls, message: Message) -> "MessageResponse":
        return cls(
            id=str(message.id),
            sender_id=str(message.sender_id),
            receiver_id=str(message.receiver_id),
            content=message.content,
            is_read=message.is_read,
            timestamp=message.timestamp,
        )


class CounterpartResponse(BaseModel):
    id: str
    name: str
    profile_picture: str = ""


class ConversationResponse(BaseModel):
    with_user: CounterpartResponse
    last_message: str
    timestamp: datetime
    unread_count: int

    @classmethod
    def from_entity(cls, conversation: Conversation) -> "ConversationResponse":
        user = conversation.with_user
        return cls(
            with_user=CounterpartResponse(id=str(user.id), name=user.name, profile_picture=user.profile_picture),
            last_message=conversation.last_message,
            timestamp=conversation.timestamp,
            unread_count=conversation.unread_count,
        )


class UnreadCountResponse(BaseModel):
    unread_count: int
