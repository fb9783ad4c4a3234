"""
Message Repository Implementation
"""
from typing import List
from uuid import UUID

from sqlalchemy import select, update, func, and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Message
from application.repositories.interfaces import IMessageRepository
from infrastructure.persistence.models.message import MessageModel
from core.exceptions import RepositoryException


class SQLAlchemyMessageRepository(IMessageRepository):
    """SQLAlchemy implementation of message repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, message: Message) -> Message:
        try:
            model = MessageModel(
                id=message.id,
                sender_id=message.sender_id,
                receiver_id=message.receiver_id,
                content=message.content,
                is_read=False,
            )
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
            return self._to_entity(model)

        except SQLAlchemyError as e:
            logger.error(f"Failed to store message {message.sender_id} -> {message.receiver_id}: {str(e)}")
            raise RepositoryException(f"Failed to send message: {str(e)}")

    async def mark_read(self, sender_id: UUID, receiver_id: UUID) -> int:
        try:
            result = await self.session.execute(
                update(MessageModel)
                .where(and_(
                    MessageModel.sender_id == sender_id,
                    MessageModel.receiver_id == receiver_id,
                    MessageModel.is_read.is_(False),
                ))
                .values(is_read=True)
            )
            await self.session.flush()
            return result.rowcount

        except SQLAlchemyError as e:
            logger.error(f"Failed to mark messages read: {str(e)}")
            raise RepositoryException(f"Failed to mark messages read: {str(e)}")

    async def get_conversation(self, user_id: UUID, other_user_id: UUID) -> List[Message]:
        try:
            result = await self.session.execute(
                select(MessageModel)
                .where(or_(
                    and_(MessageModel.sender_id == user_id, MessageModel.receiver_id == other_user_id),
                    and_(MessageModel.sender_id == other_user_id, MessageModel.receiver_id == user_id),
                ))
                .order_by(MessageModel.timestamp.asc())
                .execution_options(populate_existing=True)
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed to load conversation {user_id} <-> {other_user_id}: {str(e)}")
            raise RepositoryException(f"Failed to load conversation: {str(e)}")

    async def list_involving(self, user_id: UUID) -> List[Message]:
        """Newest first"""
        try:
            result = await self.session.execute(
                select(MessageModel)
                .where(or_(MessageModel.sender_id == user_id, MessageModel.receiver_id == user_id))
                .order_by(MessageModel.timestamp.desc())
                .execution_options(populate_existing=True)
            )
            return [self._to_entity(m) for m in result.scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Failed to list messages of {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list messages: {str(e)}")

    async def count_unread(self, receiver_id: UUID) -> int:
        try:
            result = await self.session.execute(
                select(func.count(MessageModel.id)).where(and_(
                    MessageModel.receiver_id == receiver_id,
                    MessageModel.is_read.is_(False),
                ))
            )
            return result.scalar_one()

        except SQLAlchemyError as e:
            logger.error(f"Failed to count unread messages of {receiver_id}: {str(e)}")
            raise RepositoryException(f"Failed to count unread messages: {str(e)}")

    @staticmethod
    def _to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            content=model.content,
            is_read=model.is_read,
            timestamp=model.timestamp,
        )
