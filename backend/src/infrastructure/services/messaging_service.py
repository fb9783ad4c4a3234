"""
MessagingService Implementation
"""
from typing import Dict, List
from uuid import UUID, uuid4

from application.services.messaging import IMessagingService
from application.repositories.interfaces import IMessageRepository, IUserRepository
from domain.entities import Message, Conversation
from core.exceptions import ResourceNotFoundException, ValidationException
from core.logging_config import logger


class MessagingService(IMessagingService):
    """Messaging service implementation"""

    def __init__(
        self,
        message_repository: IMessageRepository,
        user_repository: IUserRepository,
    ):
        self.message_repo = message_repository
        self.user_repo = user_repository

    async def send(self, sender_id: UUID, receiver_id: UUID, content: str) -> Message:
        if not content or not content.strip():
            raise ValidationException.single("content", "Message content cannot be empty.")

        if not await self.user_repo.get_by_id(receiver_id):
            raise ResourceNotFoundException("User", str(receiver_id))

        message = await self.message_repo.create(Message(
            id=uuid4(),
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
        ))
        logger.debug(f"Message {message.id} sent {sender_id} -> {receiver_id}")
        return message

    async def conversation(self, user_id: UUID, other_user_id: UUID) -> List[Message]:
        marked = await self.message_repo.mark_read(sender_id=other_user_id, receiver_id=user_id)
        if marked:
            logger.debug(f"Marked {marked} messages from {other_user_id} read for {user_id}")
        return await self.message_repo.get_conversation(user_id, other_user_id)

    async def conversations(self, user_id: UUID) -> List[Conversation]:
        # newest first, so the first message seen per counterpart is the latest
        messages = await self.message_repo.list_involving(user_id)

        latest: Dict[UUID, Message] = {}
        unread: Dict[UUID, int] = {}
        for message in messages:
            other = message.receiver_id if message.sender_id == user_id else message.sender_id
            latest.setdefault(other, message)
            if message.receiver_id == user_id and not message.is_read:
                unread[other] = unread.get(other, 0) + 1

        users = {u.id: u for u in await self.user_repo.get_by_ids(list(latest))}

        result = []
        for other, message in latest.items():
            counterpart = users.get(other)
            if not counterpart:
                continue
            result.append(Conversation(
                with_user=counterpart,
                last_message=message.content,
                timestamp=message.timestamp,
                unread_count=unread.get(other, 0),
            ))
        result.sort(key=lambda c: c.timestamp, reverse=True)
        return result

    async def unread_count(self, user_id: UUID) -> int:
        return await self.message_repo.count_unread(user_id)
