"""Async engine, session factory and declarative base."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from empathy_trainer.core.config import get_settings

Base = declarative_base()


def make_engine(url: str):
    # aiosqlite connections are used from one event loop only
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_async_engine(url, connect_args=connect_args, future=True)


def make_session_factory(bind) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, expire_on_commit=False, autoflush=True)


engine = make_engine(get_settings().database_url)
AsyncSessionLocal = make_session_factory(engine)
