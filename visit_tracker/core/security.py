"""
Admin Authentication

HTTP Basic authentication for every admin route. The gate is a FastAPI
dependency attached at router level, so each request is authenticated on
its own: no sessions, no tokens, no lockout.
"""

import binascii
import logging
import secrets
from base64 import b64decode
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param

from visit_tracker.core.setting import Settings, get_settings

logger = logging.getLogger(__name__)


class Utf8HTTPBasic(HTTPBasic):
    """
    HTTP Basic scheme that decodes credentials as UTF-8 (RFC 7617), falling
    back to latin-1 for clients that send legacy bytes.

    Never raises: a missing or malformed header yields None so every
    rejection goes through the same challenge in require_admin.
    """

    async def __call__(self, request: Request) -> Optional[HTTPBasicCredentials]:
        authorization = request.headers.get("Authorization")
        scheme, param = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != "basic":
            return None

        try:
            raw = b64decode(param.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError):
            return None

        try:
            decoded = raw.decode("utf-8")
        except UnicodeDecodeError:
            decoded = raw.decode("latin-1")

        username, separator, password = decoded.partition(":")
        if not separator:
            return None
        return HTTPBasicCredentials(username=username, password=password)


basic_scheme = Utf8HTTPBasic(auto_error=False)


def _matches(supplied: str, expected: str) -> bool:
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def require_admin(
    request: Request,
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_scheme),
    app_settings: Settings = Depends(get_settings),
) -> str:
    """
    Verify Basic credentials against ADMIN_USER / ADMIN_PASS.

    Returns:
        The authenticated username

    Raises:
        HTTPException 401: With a WWW-Authenticate challenge when credentials
        are absent, malformed or wrong. The body never carries admin data.
    """
    # Evaluate both comparisons so a wrong username costs the same as a wrong password
    user_ok = credentials is not None and _matches(credentials.username, app_settings.ADMIN_USER)
    pass_ok = credentials is not None and _matches(credentials.password, app_settings.ADMIN_PASS)

    if not (user_ok and pass_ok):
        if credentials is not None:
            logger.warning(
                f"Rejected admin credentials for user {credentials.username!r} on {request.url.path}"
            )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Auth required",
            headers={"WWW-Authenticate": f'Basic realm="{app_settings.ADMIN_REALM}"'},
        )

    return credentials.username
