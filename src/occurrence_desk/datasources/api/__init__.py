"""Occurrence management REST API.

Public API:
  - client: ApiClient, ApiError
  - occurrences: fetch_occurrences
  - users: find_users, create_user, update_user, delete_user
"""

from occurrence_desk.datasources.api.client import ApiClient, ApiError
from occurrence_desk.datasources.api.occurrences import fetch_occurrences
from occurrence_desk.datasources.api.users import (
    create_user,
    delete_user,
    find_users,
    update_user,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "create_user",
    "delete_user",
    "fetch_occurrences",
    "find_users",
    "update_user",
]
