"""
Messaging Service Interface
Direct messages between users (polling, no push delivery)
"""
from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from domain.entities import Message, Conversation


class IMessagingService(ABC):
    """Messaging service interface"""

    @abstractmethod
    async def send(self, sender_id: UUID, receiver_id: UUID, content: str) -> Message:
        """
        Raises:
            ValidationException: empty content
            ResourceNotFoundException: receiver does not exist
        """
        pass

    @abstractmethod
    async def conversation(self, user_id: UUID, other_user_id: UUID) -> List[Message]:
        """Marks the other user's messages read, then returns the exchange oldest first"""
        pass

    @abstractmethod
    async def conversations(self, user_id: UUID) -> List[Conversation]:
        """One entry per counterpart, newest first"""
        pass

    @abstractmethod
    async def unread_count(self, user_id: UUID) -> int:
        pass
