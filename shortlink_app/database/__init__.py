from .connection import Base, SessionLocal, build_engine, engine, get_db, ping_database

__all__ = ["Base", "SessionLocal", "build_engine", "engine", "get_db", "ping_database"]
