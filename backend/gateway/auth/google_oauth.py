"""
Google OAuth bootstrap.

Used once per deployment: the operator opens /auth, grants Drive access, and
copies the refresh token shown by the callback into GOOGLE_REFRESH_TOKEN.
Nothing here is stored by the service.
"""
import logging
from datetime import datetime
from typing import Optional

from google_auth_oauthlib.flow import Flow
from pydantic import BaseModel

from gateway.config import settings
from gateway.storage.drive_client import DRIVE_SCOPES, TOKEN_URI

logger = logging.getLogger(__name__)

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"


class AuthTokens(BaseModel):
    """Token pair returned by the code exchange."""
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expiry: Optional[datetime] = None


def _build_flow() -> Flow:
    """
    Create an OAuth flow from the configured web client.

    A fresh flow is built per request; the consent redirect and the callback
    are separate requests and share no state.
    """
    if not all([
        settings.google_client_id,
        settings.google_client_secret,
        settings.google_redirect_uri
    ]):
        raise ValueError(
            "GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET and GOOGLE_REDIRECT_URI must be set"
        )

    client_config = {
        "web": {
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "auth_uri": AUTH_URI,
            "token_uri": TOKEN_URI,
            "redirect_uris": [settings.google_redirect_uri],
        }
    }

    # No PKCE: the verifier would have to survive between the two requests
    return Flow.from_client_config(
        client_config,
        scopes=DRIVE_SCOPES,
        redirect_uri=settings.google_redirect_uri,
        autogenerate_code_verifier=False,
    )


def build_authorization_url() -> str:
    """
    Build the consent screen URL.

    access_type=offline is what makes Google issue a refresh token;
    prompt=consent makes it issue one again on repeated authorizations.
    """
    flow = _build_flow()
    authorization_url, _state = flow.authorization_url(
        access_type="offline",
        include_granted_scopes="true",
        prompt="consent",
    )
    return authorization_url


def exchange_code(code: str) -> AuthTokens:
    """
    Exchange an authorization code for tokens.

    Raises whatever the token endpoint raises (oauthlib or transport errors);
    the caller decides how to report it.
    """
    flow = _build_flow()
    flow.fetch_token(code=code)
    credentials = flow.credentials

    if not credentials.refresh_token:
        logger.warning(
            "Token exchange succeeded but no refresh token was issued. "
            "Revoke the app's access in the Google account and retry /auth."
        )

    return AuthTokens(
        access_token=credentials.token,
        refresh_token=credentials.refresh_token,
        expiry=credentials.expiry,
    )
