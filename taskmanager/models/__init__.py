"""Database model exports."""

from .activity_log import ActivityLog
from .project import PROJECT_STATUSES, Project
from .task import TASK_PRIORITIES, TASK_STATUSES, Task
from .user import Role, User

__all__ = [
    "ActivityLog",
    "PROJECT_STATUSES",
    "Project",
    "Role",
    "TASK_PRIORITIES",
    "TASK_STATUSES",
    "Task",
    "User",
]
