"""
Admin auth gate.

Credentials are compared as stored, in plaintext, against the `admin`
section of the site settings. There are no sessions: every admin request
carries HTTP Basic credentials.
"""
import logging
import secrets
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from database import Database, get_db

logger = logging.getLogger(__name__)

basic = HTTPBasic(auto_error=False)


def authenticate(settings: Dict[str, Any], username: Optional[str], password: Optional[str]) -> bool:
    admin = settings.get("admin") or {}
    expected_user = admin.get("username")
    expected_password = admin.get("password")
    if not expected_user or not expected_password or username is None or password is None:
        return False
    user_ok = secrets.compare_digest(username.encode(), str(expected_user).encode())
    password_ok = secrets.compare_digest(password.encode(), str(expected_password).encode())
    return user_ok and password_ok


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=401, detail="Authentication required", headers={"WWW-Authenticate": "Basic"})


async def require_admin(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic),
    db: Database = Depends(get_db),
) -> str:
    if credentials is None:
        raise _unauthorized()
    settings = await db.settings.load()
    if not authenticate(settings, credentials.username, credentials.password):
        logger.warning("Rejected admin credentials for %r", credentials.username)
        raise _unauthorized()
    return credentials.username
