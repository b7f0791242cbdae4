"""
URL store: the only component that reads or writes URL records.

Every write is a single statement keyed by short_code, so a record deleted
between a caller's check and its write simply matches zero rows and comes
back as not-found. SQLAlchemy failures are translated into service
exceptions here and never leak past the store.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from shortlink_app.exceptions import StoreConflictError, StoreError, StoreUnavailableError
from shortlink_app.models.url import URL

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UrlStore:
    """
    CRUD plus an atomic fetch-and-increment over the urls table.

    Works on a request-scoped Session; the Session (and its pooled
    connection) is owned and closed by the caller.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        """
        Args:
            db: Request-scoped database session
            clock: Source of created_at/updated_at values
        """
        self.db = db
        self.clock = clock

    @contextmanager
    def _guard(self):
        """Roll back and translate any failure raised inside the block"""
        try:
            yield
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("Short code conflict on write: %s", exc.orig)
            raise StoreConflictError() from exc
        except (PoolTimeoutError, OperationalError) as exc:
            self.db.rollback()
            logger.warning("URL store unavailable: %s", exc)
            raise StoreUnavailableError() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("URL store operation failed")
            raise StoreError() from exc
        except BaseException:
            self.db.rollback()
            raise

    @contextmanager
    def transaction(self):
        """
        Unit of work: commit if the block completes, otherwise roll back.

        Anything raised inside the block (including cancellation) leaves the
        table untouched.
        """
        with self._guard():
            yield self
            self.db.commit()

    def create(self, url: str, code: str) -> URL:
        """
        Insert a new record with access_count=0.

        Raises:
            StoreConflictError: code was inserted by someone else after the
                existence check
        """
        now = self.clock()
        record = URL(
            url=url,
            short_code=code,
            access_count=0,
            created_at=now,
            updated_at=now,
        )

        with self.transaction():
            self.db.add(record)

        with self._guard():
            self.db.refresh(record)
        return record

    def find_by_code(self, code: str) -> Optional[URL]:
        with self._guard():
            # Always reload: other sessions may have committed since this one
            # last saw the row
            return (
                self.db.query(URL)
                .filter(URL.short_code == code)
                .populate_existing()
                .first()
            )

    def exists_by_code(self, code: str) -> bool:
        with self._guard():
            return self.db.query(URL.id).filter(URL.short_code == code).first() is not None

    def update(self, code: str, new_url: str) -> Optional[URL]:
        """Replace url and refresh updated_at; access_count is untouched"""
        with self.transaction():
            result = self.db.execute(
                update(URL)
                .where(URL.short_code == code)
                .values(url=new_url, updated_at=self.clock())
                .execution_options(synchronize_session=False)
            )
            matched = result.rowcount

        if not matched:
            return None
        return self.find_by_code(code)

    def delete(self, code: str) -> bool:
        """Hard delete. False if no record had this code"""
        with self.transaction():
            result = self.db.execute(
                delete(URL)
                .where(URL.short_code == code)
                .execution_options(synchronize_session=False)
            )
            deleted = result.rowcount

        return deleted > 0

    def fetch_and_increment(self, code: str) -> Optional[str]:
        """
        Increment access_count, touch updated_at and return the target url.

        One UPDATE ... RETURNING statement, so the row is locked from the
        read to the write and concurrent callers each count exactly once.
        Does not commit: run it inside transaction().

        Returns:
            The record's url, or None if no record has this code
        """
        with self._guard():
            return self.db.execute(
                update(URL)
                .where(URL.short_code == code)
                .values(access_count=URL.access_count + 1, updated_at=self.clock())
                .returning(URL.url)
                .execution_options(synchronize_session=False)
            ).scalar_one_or_none()
