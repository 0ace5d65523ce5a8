from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import STAFF_ROLES, Role


@dataclass(frozen=True)
class Profile:
    """Domain entity: a person (learner, guardian or staff member).

    A learner with a `parent_id` is billed through that guardian.
    """

    profile_id: str
    full_name: Optional[str]
    role: Role
    is_active: bool = True
    parent_id: Optional[str] = None

    @property
    def billing_owner_id(self) -> str:
        return self.parent_id or self.profile_id

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES
