"""User account endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from occurrence_desk.schemas import User, UserPage

if TYPE_CHECKING:
    from occurrence_desk.datasources.api.client import ApiClient

USERS_PATH = "/users"


def find_users(
    api: ApiClient,
    page: int | None = None,
    page_size: int | None = None,
    user_id: str | None = None,
) -> UserPage:
    """
    List users.

    Called without paging arguments it returns every user (used to populate
    the search box). With ``user_id`` the result is narrowed to that user.
    """
    params: dict[str, Any] = {}
    if page is not None:
        params["page"] = page
    if page_size is not None:
        params["limit"] = page_size
    if user_id is not None:
        params["id"] = user_id

    body = api.get(USERS_PATH, params=params or None)
    if isinstance(body, list):
        users = [User.model_validate(u) for u in body]
        return UserPage(data=users, meta={"total": len(users)})
    return UserPage.model_validate(body or {})


def create_user(api: ApiClient, payload: dict[str, Any]) -> User:
    """Create a user account."""
    return User.model_validate(api.post(USERS_PATH, json=payload))


def update_user(api: ApiClient, user_id: str, payload: dict[str, Any]) -> User:
    """Update fields of an existing user."""
    return User.model_validate(api.patch(f"{USERS_PATH}/{user_id}", json=payload))


def delete_user(api: ApiClient, user_id: str) -> User:
    """Delete a user. The returned record is flagged ``deleted``."""
    body = api.delete(f"{USERS_PATH}/{user_id}") or {"id": user_id, "name": "", "email": ""}
    user = User.model_validate(body)
    return user.model_copy(update={"deleted": True})
