"""Service layer helpers."""

from .activity import activity_log_to_dict, record_activity
from .projects import members_from_project, project_to_dict
from .tasks import tags_from_task, task_to_dict
from .users import ensure_admin, user_to_dict

__all__ = [
    "activity_log_to_dict",
    "ensure_admin",
    "members_from_project",
    "project_to_dict",
    "record_activity",
    "tags_from_task",
    "task_to_dict",
    "user_to_dict",
]
