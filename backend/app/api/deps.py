# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from typing import Annotated, Literal

from fastapi import Depends, Header, status

from app.exceptions import AppError
from app.schemas.auth import AuthContext


async def get_auth_context(
    x_user_id: uuid.UUID = Header(),
    x_role: Literal["employee", "hr", "admin"] = Header(default="employee"),
) -> AuthContext:
    """Extract dev auth context from request headers."""
    return AuthContext(user_id=x_user_id, role=x_role)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_hr(
    auth: AuthDep,
) -> AuthContext:
    """Require an HR or admin role for the request."""
    if not auth.is_hr:
        raise AppError("HR access required", status_code=status.HTTP_403_FORBIDDEN)
    return auth


HRDep = Annotated[AuthContext, Depends(require_hr)]
