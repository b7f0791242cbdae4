from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from shortlink_app.services.redirect_resolver import RedirectResolver
from shortlink_app.dependencies import get_redirect_resolver, valid_short_code

router = APIRouter(tags=["redirect"])


@router.get("/{short_code}")
def redirect_to_url(
    code: str = Depends(valid_short_code),
    redirect_resolver: RedirectResolver = Depends(get_redirect_resolver)
):
    """
    Redirect to the original URL.

    The access count is incremented in the same transaction that looks the
    code up, so the 302 is only sent once the hit has been committed.
    """
    target = redirect_resolver.resolve(code)
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
