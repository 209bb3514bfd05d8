"""
Model registration: importing this module registers every table in SQLModel metadata.
When adding/removing apps, add/remove the corresponding imports here.
"""
from apps.identity.models import User
from apps.orders.models import Note, Order
from apps.tasks.models import Attachment, Task, TaskNote
from apps.workspace.models import Section, WorkspaceSettings

__all__ = ["User", "Order", "Note", "Task", "TaskNote", "Attachment", "WorkspaceSettings", "Section"]
