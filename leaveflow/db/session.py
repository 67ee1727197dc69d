"""Database engine and session management."""
from typing import Callable

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from leaveflow.config.settings import Settings

SessionFactory = Callable[[], Session]


def build_engine(settings: Settings) -> Engine:
    """Create the pooled engine described by the settings."""
    return create_engine(settings.get_database_url(), **settings.get_engine_options())


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
