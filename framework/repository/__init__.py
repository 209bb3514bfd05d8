"""
Store access: generic SQLModel repositories, owner-scoped repositories and
the unit of work that commits them together.
"""

from .base import BaseRepository, IRepository
from .owned import OwnedRepository, Patch, utcnow
from .unit_of_work import UnitOfWork

__all__ = ["BaseRepository", "IRepository", "OwnedRepository", "Patch", "UnitOfWork", "utcnow"]
