"""User administration screen controller.

Server-side paginated grid with a search box, a create/edit dialog and a
confirm-before-delete flow. Outcomes the user must see (deleted, saved,
rejected by the server) are queued as ``Notification`` entries.

Build it only after ``guards.require_admin`` allowed the session.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from occurrence_desk.datasources.api import (
    ApiError,
    create_user,
    delete_user,
    find_users,
    update_user,
)

if TYPE_CHECKING:
    from occurrence_desk.datasources.api import ApiClient
    from occurrence_desk.schemas import User

logger = logging.getLogger(__name__)

PAGE_SIZE_OPTIONS = (5, 6, 7)

UNEXPECTED_RESPONSE = "Unexpected response from the server"


class Level(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: Level
    message: str


def _reason(exc: ApiError | ValidationError) -> str:
    """Server message for rejections, a generic one for malformed payloads."""
    return exc.message if isinstance(exc, ApiError) else UNEXPECTED_RESPONSE


class UsersView:
    """State for the users grid and its dialogs."""

    def __init__(self, api: ApiClient, page_size: int = PAGE_SIZE_OPTIONS[0]) -> None:
        self.api = api
        self.page = 0  # 0-based here, 1-based on the wire
        self.page_size = page_size
        self.total = 0
        self.loading = False
        self.users: list[User] = []
        self.search_options: list[User] = []
        self.query_user: User | None = None

        # Create/edit dialog
        self.dialog_open = False
        self.editing: User | None = None

        # Delete confirmation
        self.confirm_open = False
        self.pending_delete_id: str | None = None

        self.notifications: list[Notification] = []

    # -------------------------------------------------------------------------
    # Loading, paging, search
    # -------------------------------------------------------------------------

    def load(self) -> bool:
        """Fetch the current page and the full search list. Returns success."""
        self.loading = True
        try:
            page = find_users(
                self.api,
                page=self.page + 1,
                page_size=self.page_size,
                user_id=self.query_user.id if self.query_user else None,
            )
            everyone = find_users(self.api)
        except (ApiError, ValidationError):
            logger.exception("Failed to load users")
            return False
        finally:
            self.loading = False

        self.search_options = everyone.data
        self.users = page.data
        self.total = page.meta.total
        return True

    def set_pagination(self, page: int, page_size: int | None = None) -> bool:
        if page < 0:
            msg = f"Page must be >= 0, got {page}"
            raise ValueError(msg)
        if page_size is not None:
            if page_size not in PAGE_SIZE_OPTIONS:
                msg = f"Page size must be one of {PAGE_SIZE_OPTIONS}, got {page_size}"
                raise ValueError(msg)
            self.page_size = page_size
        self.page = page
        return self.load()

    def search(self, user: User | None) -> bool:
        """Narrow the grid to one user; None clears the search."""
        self.query_user = user
        return self.load()

    @property
    def page_count(self) -> int:
        """Number of pages for the current total (at least 1)."""
        return max(1, math.ceil(self.total / self.page_size))

    # -------------------------------------------------------------------------
    # Create / edit dialog
    # -------------------------------------------------------------------------

    def open_create(self) -> None:
        self.editing = None
        self.dialog_open = True

    def open_edit(self, user: User) -> None:
        self.editing = user
        self.dialog_open = True

    @property
    def is_edit(self) -> bool:
        return self.editing is not None

    def close(self) -> None:
        """Close whichever dialog is open and reset its state."""
        self.dialog_open = False
        self.editing = None
        self.confirm_open = False

    def save(self, payload: dict[str, Any]) -> User | None:
        """Create or update from the dialog form."""
        try:
            if self.editing is not None:
                user = update_user(self.api, self.editing.id, payload)
                self.refresh_data(user)
                self._notify(Level.SUCCESS, "User updated successfully!")
            else:
                user = create_user(self.api, payload)
                self._notify(Level.SUCCESS, "User created successfully!")
        except (ApiError, ValidationError) as exc:
            reason = _reason(exc)
            logger.warning("Saving user rejected: %s", reason)
            self._notify(Level.ERROR, reason)
            return None
        self.close()
        return user

    # -------------------------------------------------------------------------
    # Delete flow
    # -------------------------------------------------------------------------

    def request_delete(self, user_id: str) -> None:
        self.pending_delete_id = user_id
        self.confirm_open = True

    def confirm_delete(self) -> User | None:
        user_id = self.pending_delete_id
        deleted: User | None = None
        if user_id:
            try:
                deleted = delete_user(self.api, user_id)
            except (ApiError, ValidationError) as exc:
                reason = _reason(exc)
                logger.warning("Deleting user %s rejected: %s", user_id, reason)
                self._notify(Level.ERROR, reason)
            else:
                self.refresh_data(deleted)
                self._notify(Level.SUCCESS, "User deleted successfully!")
        self.pending_delete_id = None
        self.confirm_open = False
        return deleted

    def refresh_data(self, user: User) -> None:
        """Merge a user returned by the server into the visible rows."""
        rows = list(self.users)
        index = next((i for i, row in enumerate(rows) if row.id == user.id), None)
        if index is None:
            return
        if user.deleted:
            del rows[index]
        else:
            rows[index] = user
        self.users = rows

    def _notify(self, level: Level, message: str) -> None:
        self.notifications.append(Notification(level, message))

    def drain_notifications(self) -> list[Notification]:
        out, self.notifications = self.notifications, []
        return out
