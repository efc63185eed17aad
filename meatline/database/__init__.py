from .database import get_session, get_session_factory, init_db, close_db, get_engine

__all__ = ["get_session", "get_session_factory", "init_db", "close_db", "get_engine"]
