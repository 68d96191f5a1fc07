"""
OAuth bootstrap endpoints.

GET /auth redirects the operator to Google's consent screen.
GET /auth/google/callback exchanges the returned code and shows the
refresh token so it can be copied into GOOGLE_REFRESH_TOKEN.
"""
import html
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, RedirectResponse

from gateway.auth.google_oauth import build_authorization_url, exchange_code

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/auth")
async def start_auth():
    """Redirect to the Google consent screen for Drive file access."""
    try:
        authorization_url = build_authorization_url()
    except ValueError as e:
        logger.error(f"OAuth not configured: {e}", extra={"event": "oauth_not_configured"})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="OAuth client not configured"
        )

    return RedirectResponse(authorization_url)


@router.get("/auth/google/callback", response_class=HTMLResponse)
async def auth_callback(code: Optional[str] = None):
    """
    Exchange the authorization code for tokens.

    The refresh token is logged and rendered; it is not stored.
    """
    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No code provided"
        )

    try:
        tokens = await run_in_threadpool(exchange_code, code)
    except Exception as e:
        logger.error(
            f"Token exchange failed: {str(e)}",
            extra={"event": "oauth_exchange_failed", "error": str(e)},
            exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error"
        )

    if not tokens.refresh_token:
        return HTMLResponse(
            "<h3>Authorized, but no refresh token was issued.</h3>"
            "<p>Remove the app from your Google account permissions and visit /auth again.</p>"
        )

    logger.info(
        f"REFRESH TOKEN: {tokens.refresh_token}",
        extra={"event": "refresh_token_issued"}
    )

    return HTMLResponse(
        f"<h3>Success!</h3><p>Refresh Token: {html.escape(tokens.refresh_token)}</p>"
    )
