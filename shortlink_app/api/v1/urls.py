from fastapi import APIRouter, Depends, Response, status
from shortlink_app.schemas.url import URLResponse, URLStats
from shortlink_app.services.url_service import URLService
from shortlink_app.dependencies import (
    get_url_service,
    valid_create_url,
    valid_short_code,
    valid_update_url,
)

router = APIRouter(prefix="/urls", tags=["urls"])

# Validation dependencies are declared first so malformed input is rejected
# before a database session is opened.


@router.post("/", response_model=URLResponse, status_code=status.HTTP_201_CREATED)
def create_short_url(
    url: str = Depends(valid_create_url),
    url_service: URLService = Depends(get_url_service)
):
    """Create a new short URL"""
    return url_service.create_short_url(url)


@router.get("/{short_code}", response_model=URLResponse)
def get_url_info(
    code: str = Depends(valid_short_code),
    url_service: URLService = Depends(get_url_service)
):
    """Get information about a short URL"""
    return url_service.get_url(code)


@router.get("/{short_code}/stats", response_model=URLStats)
def get_url_stats(
    code: str = Depends(valid_short_code),
    url_service: URLService = Depends(get_url_service)
):
    """Get access statistics for a short URL"""
    return url_service.get_url_stats(code)


@router.put("/{short_code}", response_model=URLResponse)
def update_url(
    code: str = Depends(valid_short_code),
    url: str = Depends(valid_update_url),
    url_service: URLService = Depends(get_url_service)
):
    """Point a short URL at a new destination (access count is kept)"""
    return url_service.update_url(code, url)


@router.delete("/{short_code}", status_code=status.HTTP_204_NO_CONTENT)
def delete_url(
    code: str = Depends(valid_short_code),
    url_service: URLService = Depends(get_url_service)
):
    """Delete a short URL"""
    url_service.delete_url(code)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
