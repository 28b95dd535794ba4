from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from app.middleware import install_query_counter


class Base(DeclarativeBase):
    pass


class Database:
    """
    Storage client owning the async engine and its session factory.

    One instance is built by the application lifespan (or handed to
    ``create_app`` by tests) and reached by request handlers through
    ``app.state.db``; nothing in the package holds a global engine.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs) -> None:
        self.url = url
        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)

        # Register the per-request SQL query counter on this engine.
        install_query_counter(self.engine)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create or extend the schema for every mapped table."""
        # Importing the models registers them on Base.metadata.
        import app.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request):
    db: Database = request.app.state.db
    async with db.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
