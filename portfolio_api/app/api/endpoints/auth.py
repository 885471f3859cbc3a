"""
Authentication endpoints.

``POST /auth/login`` exchanges an e‑mail and password for an opaque
bearer token; ``POST /auth/logout`` revokes the token used for the
request.  ``GET /user`` (see ``user_router``) returns the account the
presented token belongs to.

Failed logins always answer with the same generic message so that a
caller cannot learn whether the e‑mail exists.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from portfolio_api.app.core.security import AuthContext, get_current_user
from portfolio_api.app.core.validation import validate_payload
from portfolio_api.app.schemas.user import LoginIn, UserRead
from portfolio_api.app.services.token_service import TokenService
from portfolio_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)

router = APIRouter()
user_router = APIRouter()


@router.post("/login")
async def login(payload: Optional[Dict[str, Any]] = Body(None)) -> Dict[str, Any]:
    """Аутентифицировать пользователя и вернуть токен.

    400 with field errors on malformed input, 401 on wrong
    credentials, otherwise the user and a freshly issued token.
    """
    credentials = validate_payload(LoginIn, payload)
    user = await UserService.authenticate(credentials["email"], credentials["password"])
    if user is None:
        logger.warning("Failed login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = await TokenService.issue(user.id)
    logger.info("User %s logged in", user.id)
    return {"status": True, "user": user.model_dump(), "token": token}


@router.post("/logout")
async def logout(auth: AuthContext = Depends(get_current_user)) -> Dict[str, Any]:
    """Revoke the token presented with this request.

    Other tokens of the same user stay valid.
    """
    await TokenService.revoke(auth.token_id)
    logger.info("User %s logged out", auth.user.id)
    return {"status": True, "message": "User successfully logged out"}


@user_router.get("", response_model=UserRead)
async def current_user(auth: AuthContext = Depends(get_current_user)) -> UserRead:
    """Return the authenticated user."""
    return auth.user
