"""
Message ORM Model
"""
import uuid
from sqlalchemy import Column, Boolean, DateTime, Text, ForeignKey, Uuid

from core.clock import utcnow
from core.database import Base


class MessageModel(Base):
    """Direct message table ORM model"""

    __tablename__ = "messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    sender_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    timestamp = Column(DateTime, default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<MessageModel {self.sender_id} -> {self.receiver_id}>"
