"""Database layer."""

from projector_core.db.base import Base
from projector_core.db.engine import get_session, init_engine

__all__ = ["Base", "get_session", "init_engine"]
