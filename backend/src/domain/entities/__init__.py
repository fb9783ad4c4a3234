"""Domain Entities - Core business objects"""

from .user import User, Document, Skill, Experience, Education
from .job import Job
from .application import Application, AttachedDocument, ApplicationDetails
from .message import Message, Conversation
__all__ = [
    "User",
    "Document",
    "Skill",
    "Experience",
    "Education",
    "Job",
    "Application",
    "AttachedDocument",
    "ApplicationDetails",
    "Message",
    "Conversation",
]
