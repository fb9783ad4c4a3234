"""ORM Models Package"""

from .application import ApplicationModel
from .job import JobModel
from .message import MessageModel
from .user import UserModel

__all__ = [
    "ApplicationModel",
    "JobModel",
    "MessageModel",
    "UserModel",
]
