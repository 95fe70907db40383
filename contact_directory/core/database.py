# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""SQLAlchemy engine singleton and the employees table."""
from sqlalchemy import (
    Column, Date, DateTime, Index, Integer, MetaData, String, Table, create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from contact_directory.core.config import settings

metadata = MetaData()

employees = Table(
    "employees",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(200), nullable=False),
    Column("phone", String(20), nullable=False),
    Column("joined_date", Date, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Index("ux_employees_name", "name", unique=True),
)


def build_engine(url: str) -> Engine:
    """Create an engine; SQLite gets thread-sharing, in-memory SQLite one shared connection."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, **kwargs)
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.POOL_SIZE,
        max_overflow=settings.MAX_OVERFLOW,
        pool_recycle=settings.POOL_RECYCLE,
    )


def create_tables(bind: Engine) -> None:
    metadata.create_all(bind)


engine = build_engine(settings.DATABASE_URL)
