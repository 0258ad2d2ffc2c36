"""
Wegesa Users Engine — Application Service
===========================================
Staff accounts referenced by dispatches (authorized / issued by)
and returns (received by).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.store import CrudService
from engines.users.models import Role, User


class UserService(CrudService[User]):
    record_type = User
    entity_name = "User"
    id_field = "user_id"
    read_only = ()
    logger_name = "wegesa.users"

    def _coerce_patch(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        if "role" in patch:
            patch["role"] = Role(patch["role"])
        if "email" in patch and isinstance(patch["email"], str):
            patch["email"] = patch["email"].strip().lower()
        return patch

    def add_user(
        self,
        *,
        name: str,
        email: str,
        role,
        is_active: bool = True,
    ) -> User:
        role = Role(role)
        email = email.strip().lower()
        if self.find_by_email(email) is not None:
            raise ValueError(f"email '{email}' is already registered.")
        return self._create(lambda new_id, _now: User(
            user_id=new_id,
            name=name,
            email=email,
            role=role,
            is_active=is_active,
        ))

    def update(self, record_id: str, patch) -> User:
        email = patch.get("email")
        if isinstance(email, str):
            existing = self.find_by_email(email.strip().lower())
            if existing is not None and existing.user_id != record_id:
                raise ValueError(f"email '{email}' is already registered.")
        return super().update(record_id, patch)

    def find_by_email(self, email: str) -> Optional[User]:
        needle = email.strip().lower()
        matches = self.list(lambda u: u.email == needle)
        return matches[0] if matches else None

    def list_users(self, *, role=None, active_only: bool = False) -> List[User]:
        role_filter = Role(role) if role is not None else None
        return self.list(
            lambda u: (role_filter is None or u.role is role_filter)
            and (not active_only or u.is_active)
        )
