import logging
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from .config import settings
from .base import Base

log = logging.getLogger(__name__)

engine: AsyncEngine | None = None
SessionLocal: async_sessionmaker[AsyncSession] | None = None

def _set_sqlite_pragmas(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA journal_mode=WAL")
    # fsync on every commit: a committed write survives a crash
    cur.execute("PRAGMA synchronous=FULL")
    cur.execute("PRAGMA foreign_keys=ON")
    cur.execute(f"PRAGMA busy_timeout={int(settings.SQLITE_BUSY_TIMEOUT_MS)}")
    cur.close()

def configure(url: str | None = None) -> AsyncEngine:
    global engine, SessionLocal
    engine = create_async_engine(url or settings.DATABASE_URL)
    event.listen(engine.sync_engine, "connect", _set_sqlite_pragmas)
    SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    log.info("Store configured at %s", engine.url.render_as_string(hide_password=True))
    return engine

async def init_models():
    # import models so they register with Base.metadata
    from carestore.modules.contacts import models as _contacts  # noqa: F401
    from carestore.modules.medications import models as _medications  # noqa: F401
    from carestore.modules.care_instructions import models as _care  # noqa: F401

    if engine is None:
        configure()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def dispose():
    global engine, SessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    SessionLocal = None

async def get_session():
    if SessionLocal is None:
        configure()
    async with SessionLocal() as session:
        yield session
