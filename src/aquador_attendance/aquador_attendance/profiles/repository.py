from __future__ import annotations

from typing import Optional, Protocol

from .model import Profile


class ProfileRepository(Protocol):
    """Repository interface for profiles.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        raise NotImplementedError
