"""
cms/services/user_service.py -- Back-office user lookup.
"""

from __future__ import annotations

import threading
from typing import Iterable

from cms.models.base import User


class UserService:
    def __init__(self, users: Iterable[User] = ()):
        self._lock = threading.RLock()
        self._users: dict[int, User] = {u.id: u for u in users}

    def get_user_by_id(self, user_id: int) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def save_user(self, user: User) -> None:
        with self._lock:
            self._users[user.id] = user
