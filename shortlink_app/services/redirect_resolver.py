"""
Redirect resolution: the one read-modify-write path in the service.

    start -> locate -> increment + touch -> commit -> target url
               |               |
            missing         failure
               v               v
           not found     rollback, error

The locate and the increment are a single UPDATE ... RETURNING inside an
explicit transaction, so a redirect either counts exactly once and returns
its url or leaves the record exactly as it was.
"""

import logging

from shortlink_app.exceptions import (
    RedirectFailedError,
    StoreError,
    StoreUnavailableError,
    URLNotFoundError,
)
from shortlink_app.storage.url_store import UrlStore

logger = logging.getLogger(__name__)


class RedirectResolver:
    """Atomic lookup + increment + redirect target selection"""

    def __init__(self, store: UrlStore):
        self.store = store

    def resolve(self, code: str) -> str:
        """
        Count one access of code and return the url to redirect to.

        Raises:
            URLNotFoundError: no record has this code (nothing was written)
            StoreUnavailableError: no connection could be acquired (retryable)
            RedirectFailedError: the transaction failed and was rolled back
        """
        try:
            with self.store.transaction():
                target = self.store.fetch_and_increment(code)
                if target is None:
                    raise URLNotFoundError(f"No URL found for short code: {code}")
        except StoreUnavailableError:
            raise
        except StoreError as exc:
            logger.error("Redirect transaction for %r rolled back: %s", code, exc)
            raise RedirectFailedError(
                f"Redirect for short code {code} failed and was rolled back"
            ) from exc

        logger.info("Redirecting %s to %s", code, target)
        return target
