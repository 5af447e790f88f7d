# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel

HR_ROLES = frozenset({"hr", "admin"})


class AuthContext(BaseModel):
    """Dev auth context extracted from request headers."""

    user_id: uuid.UUID
    role: str = "employee"

    @property
    def is_hr(self) -> bool:
        return self.role in HR_ROLES
