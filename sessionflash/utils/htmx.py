"""HTMX-aware redirects."""

from fastapi import Request, Response
from fastapi.responses import RedirectResponse


def is_htmx(request: Request) -> bool:
    """Check if request is from HTMX."""
    return request.headers.get("HX-Request", "false").lower() == "true"


def redirect_after_post(request: Request, url: str) -> Response:
    """
    Redirect after a write so the flash shows on the next page.

    HTMX clients get 204 + HX-Redirect and follow it client-side; everyone else
    gets a 303.
    """
    if is_htmx(request):
        return Response(status_code=204, headers={"HX-Redirect": url})
    return RedirectResponse(url, status_code=303)
