from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from social_api.config import settings
from social_api.middleware import install_query_counter


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless this is set per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs):
    """
    Create an async engine for *url* with the app's connection hooks.

    Every engine gets the per-request query counter. SQLite engines also get
    foreign-key enforcement, so deleting a user who still has reactions
    fails there the same way it does on PostgreSQL.
    """
    new_engine = create_async_engine(url, **kwargs)
    install_query_counter(new_engine)
    if new_engine.dialect.name == "sqlite":
        event.listen(new_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return new_engine


def build_session_factory(bind) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# Module-level engine variable allows tests to override with a test engine.
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG, pool_pre_ping=True)
async_session = build_session_factory(engine)


class Base(DeclarativeBase):
    pass


async def get_db():
    """
    Yield one session per request.

    The request is the transaction: everything the services flush is
    committed together, and any exception rolls all of it back.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
