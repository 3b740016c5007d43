"""Cookie-based JWT authentication.

Tokens are signed with ACCESS_TOKEN_SECRET and carry whatever identity
payload was posted to /jwt plus an ``exp`` claim. Nothing is stored
server-side: a token is valid while its signature checks out and it has
not expired.

Note that /jwt does not verify the claimed email against any identity
provider. Any caller can obtain a token for any email.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, Response
from jose import JWTError, jwt

from config import Settings, get_settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
COOKIE_NAME = "token"


def cookie_options(settings: Settings) -> Dict[str, Any]:
    # localhost:5000 and localhost:5173 count as same-site, so development
    # runs strict and insecure; production front-ends are cross-site
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "strict",
    }


def create_access_token(data: dict, secret: str, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def set_token_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(COOKIE_NAME, token, **cookie_options(settings))


def clear_token_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(COOKIE_NAME, **cookie_options(settings))


def verify_token(request: Request, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    unauthorized = HTTPException(status_code=401, detail="unauthorized access")
    token = request.cookies.get(COOKIE_NAME)
    if not token:
        logger.warning("Missing token cookie", extra={"path": request.url.path})
        raise unauthorized
    try:
        payload = jwt.decode(token, settings.access_token_secret, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning("Rejected token", extra={"path": request.url.path, "reason": str(e)})
        raise unauthorized
    request.state.user = payload
    return payload


def require_owner(param: str = "email"):
    """Dependency factory: the caller's token email must equal query parameter ``param``."""

    def owner_dep(request: Request, user: Dict[str, Any] = Depends(verify_token)) -> Dict[str, Any]:
        requested = request.query_params.get(param)
        if requested is None or user.get("email") != requested:
            logger.warning(
                "Ownership check failed",
                extra={"path": request.url.path, "request_id": getattr(request.state, "request_id", None)},
            )
            raise HTTPException(status_code=403, detail="forbidden access")
        return user

    return owner_dep
