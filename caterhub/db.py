from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from caterhub.core.config import settings
from caterhub.models.base import Base

if not settings.database_url:
    raise ValueError("DATABASE_URL is not set!")


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # aiosqlite runs the connection on its own thread
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


def enable_sqlite_foreign_keys(async_engine):
    """SQLite ignores ON DELETE rules unless each connection opts in."""
    if async_engine.url.get_backend_name() != "sqlite":
        return

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    settings.database_url,
    echo=settings.sql_echo,
    **_engine_options(settings.database_url),
)
enable_sqlite_foreign_keys(engine)

# Objects stay readable after commit; reads that follow a write use populate_existing
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    async with async_session() as session:
        yield session


async def create_db_and_tables():
    import caterhub.models  # registers all models via models/__init__.py

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
