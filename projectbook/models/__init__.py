from .user import User
from .project import Project
from .task import Task
from .note import Note

# Export all models for easy importing
__all__ = ["User", "Project", "Task", "Note"]
