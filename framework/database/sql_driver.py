import asyncio
from contextlib import asynccontextmanager
from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession
from .base import BaseDatabaseDriver

class SQLDriver(BaseDatabaseDriver):
    def __init__(self, url: str, echo: bool = False):
        self.url = url
        engine_kwargs = {"echo": echo, "future": True}
        self.shared_connection = url.startswith("sqlite") and ":memory:" in url
        if self.shared_connection:
            # In-memory SQLite only exists on one connection
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            engine_kwargs["poolclass"] = StaticPool
        self.engine = create_async_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        # Sessions on a shared connection would share one transaction; run them one at a time
        self._session_lock = asyncio.Lock() if self.shared_connection else None

    async def connect(self):
        """Check connectivity (engine manages the pool)."""
        from sqlalchemy import text
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

    async def disconnect(self):
        """Dispose engine and its connections."""
        await self.engine.dispose()

    async def create_all(self):
        """Create tables for every registered model."""
        import apps.models  # noqa: F401  (registers tables in metadata)
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    @asynccontextmanager
    async def _exclusive(self):
        if self._session_lock is None:
            yield
            return
        async with self._session_lock:
            yield

    async def get_session(self):
        async with self._exclusive():
            async with self.session_factory() as session:
                yield session
