"""
Message Domain Entity
Direct message between two users
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from .user import User


@dataclass(frozen=True)
class Message:
    """Message domain entity - immutable"""

    id: UUID
    sender_id: UUID
    receiver_id: UUID
    content: str
    is_read: bool = False
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        if not self.content or not self.content.strip():
            raise ValueError("Message content cannot be empty")


@dataclass(frozen=True)
class Conversation:
    """Latest message and unread count for one counterpart"""

    with_user: User
    last_message: str
    timestamp: datetime
    unread_count: int = 0
