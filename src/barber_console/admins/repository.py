from __future__ import annotations

from typing import Protocol, Tuple

from .model import AdminProfile


class AdminRepository(Protocol):
    def login(self, username: str, password: str) -> Tuple[AdminProfile, str]:
        """Returns the admin profile and its bearer token."""

        raise NotImplementedError
