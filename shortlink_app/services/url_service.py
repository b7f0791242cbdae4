import logging
from datetime import datetime, timezone

from shortlink_app.exceptions import URLNotFoundError
from shortlink_app.models.url import URL
from shortlink_app.schemas.url import URLStats
from shortlink_app.services.redirect_resolver import RedirectResolver
from shortlink_app.services.short_code import UniquenessResolver
from shortlink_app.storage.url_store import UrlStore

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class URLService:
    """
    URL service with its collaborators injected.

    - UrlStore owns the records (one request-scoped session)
    - UniquenessResolver picks a free short code on create
    - RedirectResolver runs the counted redirect transaction

    Inputs are expected to have passed shortlink_app.validators already.
    """

    def __init__(
        self,
        store: UrlStore,
        resolver: UniquenessResolver,
        redirect_resolver: RedirectResolver = None,
    ):
        self.store = store
        self.resolver = resolver
        self.redirect_resolver = redirect_resolver or RedirectResolver(store)

    def create_short_url(self, url: str) -> URL:
        """Create a new short URL

        Always creates a new record even if the long URL already exists.

        Raises:
            CodeGenerationExhaustedError / CodeGenerationInfrastructureError:
                no free code could be found
            StoreConflictError: the chosen code was taken before the insert;
                the caller should retry
        """
        code = self.resolver.resolve(self.store.exists_by_code)
        record = self.store.create(url, code)
        logger.info("Created short URL %s for %s", record.short_code, record.url)
        return record

    def get_url(self, short_code: str) -> URL:
        url = self.store.find_by_code(short_code)
        if url is None:
            raise URLNotFoundError(f"No URL found for short code: {short_code}")
        return url

    def update_url(self, short_code: str, new_url: str) -> URL:
        url = self.store.update(short_code, new_url)
        if url is None:
            raise URLNotFoundError(f"No short URL found with code: {short_code}")
        logger.info("Updated short URL %s to %s", short_code, new_url)
        return url

    def delete_url(self, short_code: str) -> None:
        """Hard delete; later lookups of this code report not-found"""
        if not self.store.delete(short_code):
            raise URLNotFoundError(f"No short URL found with code: {short_code}")
        logger.info("Deleted short URL %s", short_code)

    def get_url_stats(self, short_code: str) -> URLStats:
        """Get statistics for a short URL (the raw counter plus its age)"""
        url = self.get_url(short_code)
        created_at = _as_utc(url.created_at)

        return URLStats(
            short_code=url.short_code,
            url=url.url,
            access_count=url.access_count,
            created_at=created_at,
            last_updated=_as_utc(url.updated_at),
            created_days_ago=max(0, (self.store.clock() - created_at).days),
        )

    def redirect(self, short_code: str) -> str:
        """Count one access and return the redirect target"""
        return self.redirect_resolver.resolve(short_code)
