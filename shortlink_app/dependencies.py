"""
FastAPI dependencies for dependency injection.

Stateless collaborators (code generator, uniqueness resolver) are process-wide
singletons; everything that touches the database is built per request on
top of the request-scoped session from get_db.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from shortlink_app.config import settings
from shortlink_app.database.connection import get_db
from shortlink_app.schemas.url import URLCreate, URLUpdate
from shortlink_app.services.redirect_resolver import RedirectResolver
from shortlink_app.services.short_code import CodeGenerator, UniquenessResolver
from shortlink_app.services.url_service import URLService
from shortlink_app.storage.url_store import UrlStore
from shortlink_app.validators import validate_short_code, validate_url


@lru_cache()
def get_code_generator() -> CodeGenerator:
    """
    Get code generator instance (singleton).

    Safe to share: it holds no mutable state and its default random source
    (secrets.token_bytes) is thread-safe.
    """
    return CodeGenerator(default_length=settings.short_code_length)


@lru_cache()
def get_uniqueness_resolver() -> UniquenessResolver:
    return UniquenessResolver(
        generator=get_code_generator(),
        max_attempts=settings.max_generation_attempts,
    )


def get_url_store(db: Session = Depends(get_db)) -> UrlStore:
    return UrlStore(db)


def get_redirect_resolver(store: UrlStore = Depends(get_url_store)) -> RedirectResolver:
    return RedirectResolver(store)


def get_url_service(
    store: UrlStore = Depends(get_url_store),
    resolver: UniquenessResolver = Depends(get_uniqueness_resolver),
) -> URLService:
    """
    Get URLService with all dependencies injected.

    Controllers depend on the service; the service depends on the store and
    the resolver.
    """
    return URLService(store=store, resolver=resolver)


def valid_short_code(short_code: str) -> str:
    """Path parameter check; runs before any store or session is created"""
    return validate_short_code(short_code, settings.short_code_length)


def valid_create_url(payload: URLCreate) -> str:
    return validate_url(payload.url)


def valid_update_url(payload: URLUpdate) -> str:
    return validate_url(payload.url)
