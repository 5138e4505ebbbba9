from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from playbook.core.config import get_settings

_settings = get_settings()

# NullPool when an external pooler (pgbouncer) owns the connections.
engine = create_async_engine(
    _settings.async_database_url,
    echo=_settings.sql_echo,
    poolclass=NullPool if _settings.sql_null_pool else None,
)

async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)
Base = declarative_base()
