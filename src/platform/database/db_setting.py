"""Database entry points re-exported for application code."""

from src.platform.database.orm_db_setting import (
    AsyncEngineManager,
    Base,
    create_db_and_tables,
    engine_manager,
    get_async_session,
    get_engine,
    get_session_maker,
)


__all__ = [
    'AsyncEngineManager',
    'Base',
    'create_db_and_tables',
    'engine_manager',
    'get_async_session',
    'get_engine',
    'get_session_maker',
]
