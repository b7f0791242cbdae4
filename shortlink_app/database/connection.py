"""
Database engine, session factory and the request-scoped session dependency.

Every request gets its own Session; its pooled connection goes back to the
pool when the session closes, whatever the outcome of the request.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from shortlink_app.config import settings


def build_engine(database_url: str = None) -> Engine:
    """
    Create an engine with a bounded connection pool.

    SQLite gets its default pool (and cross-thread access for the
    threadpool FastAPI runs sync routes on); server databases get an explicit
    size, overflow and acquisition timeout so exhaustion turns into a
    TimeoutError instead of an unbounded wait.
    """
    database_url = database_url or settings.database_url

    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
    )


engine = build_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def ping_database(bind: Engine = None) -> None:
    """Round-trip a SELECT 1; raises SQLAlchemyError if the database is unreachable"""
    with (bind or engine).connect() as connection:
        connection.execute(text("SELECT 1"))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # Rolls back anything left uncommitted, e.g. a cancelled redirect
        db.close()
