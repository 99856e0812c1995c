from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from cycling_photos.core.config import get_settings


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
	if async_engine.dialect.name != "sqlite":
		return

	@event.listens_for(async_engine.sync_engine, "connect")
	def _set_pragma(dbapi_connection, connection_record) -> None:
		cursor = dbapi_connection.cursor()
		cursor.execute("PRAGMA foreign_keys=ON")
		cursor.close()


settings = get_settings()

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, pool_pre_ping=True)
enable_sqlite_foreign_keys(engine)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
	async with async_session_maker() as session:
		yield session
