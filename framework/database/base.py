from abc import ABC, abstractmethod

class BaseDatabaseDriver(ABC):
    """Lifecycle contract for the storage backend behind the repositories."""

    @abstractmethod
    async def connect(self):
        pass

    @abstractmethod
    async def disconnect(self):
        pass

    @abstractmethod
    async def create_all(self):
        """Create the schema for all registered models."""
        pass

    @abstractmethod
    def get_session(self):
        """Async generator yielding one session per unit of work."""
        pass
