"""Tests for the user administration controller."""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock, patch

import pytest

from occurrence_desk.datasources.api import ApiError
from occurrence_desk.schemas import PageMeta, User, UserPage
from occurrence_desk.views.users import UNEXPECTED_RESPONSE, Level, Notification, UsersView

ANA = User(id="u1", name="Ana", email="ana@example.com", role="ADMIN")
BRUNO = User(id="u2", name="Bruno", email="bruno@example.com")
CARLA = User(id="u3", name="Carla", email="carla@example.com")


def _page(users: list[User], total: int | None = None) -> UserPage:
    return UserPage(data=users, meta=PageMeta(total=len(users) if total is None else total))


def _malformed_user(*_args: Any, **_kwargs: Any) -> User:
    return User.model_validate({"id": "u9"})


@pytest.fixture
def view() -> UsersView:
    return UsersView(Mock())


class TestLoad:
    """Test loading, paging and search."""

    def test_load_fetches_page_and_search_list(self, view: UsersView) -> None:
        with patch("occurrence_desk.views.users.find_users") as mock_find:
            mock_find.side_effect = [_page([ANA, BRUNO], total=12), _page([ANA, BRUNO, CARLA])]

            assert view.load() is True

        assert view.users == [ANA, BRUNO]
        assert view.total == 12
        assert view.search_options == [ANA, BRUNO, CARLA]
        assert view.loading is False
        first, second = mock_find.call_args_list
        assert first.kwargs == {"page": 1, "page_size": 5, "user_id": None}
        assert second.kwargs == {}

    def test_load_failure_keeps_rows(self, view: UsersView) -> None:
        view.users = [ANA]
        with patch("occurrence_desk.views.users.find_users", side_effect=ApiError("down")):
            assert view.load() is False
        assert view.users == [ANA]
        assert view.loading is False

    def test_pagination_is_one_based_on_the_wire(self, view: UsersView) -> None:
        with patch("occurrence_desk.views.users.find_users") as mock_find:
            mock_find.return_value = _page([CARLA], total=13)
            view.set_pagination(2, page_size=6)
        assert view.page == 2
        assert view.page_size == 6
        assert mock_find.call_args_list[0].kwargs["page"] == 3
        assert mock_find.call_args_list[0].kwargs["page_size"] == 6

    def test_rejects_unknown_page_size(self, view: UsersView) -> None:
        with pytest.raises(ValueError, match="Page size"):
            view.set_pagination(0, page_size=50)

    def test_rejects_negative_page(self, view: UsersView) -> None:
        with pytest.raises(ValueError):
            view.set_pagination(-1)

    def test_search_and_clear(self, view: UsersView) -> None:
        with patch("occurrence_desk.views.users.find_users") as mock_find:
            mock_find.return_value = _page([BRUNO])
            view.search(BRUNO)
            assert mock_find.call_args_list[0].kwargs["user_id"] == "u2"

            mock_find.reset_mock()
            view.search(None)
            assert mock_find.call_args_list[0].kwargs["user_id"] is None

    def test_page_count(self, view: UsersView) -> None:
        assert view.page_count == 1
        view.total = 11
        assert view.page_count == 3
        view.page_size = 6
        assert view.page_count == 2

    def test_malformed_payload_fails_load(self, view: UsersView) -> None:
        view.users = [ANA]
        with patch("occurrence_desk.views.users.find_users", side_effect=_malformed_user):
            assert view.load() is False
        assert view.users == [ANA]
        assert view.loading is False


class TestDialog:
    """Test create/edit dialog state."""

    def test_open_create_and_edit(self, view: UsersView) -> None:
        view.open_create()
        assert view.dialog_open and not view.is_edit
        view.open_edit(ANA)
        assert view.is_edit
        assert view.editing == ANA
        view.close()
        assert not view.dialog_open
        assert view.editing is None

    def test_save_edit_merges_row(self, view: UsersView) -> None:
        view.users = [ANA, BRUNO]
        renamed = BRUNO.model_copy(update={"name": "Bruno S."})
        view.open_edit(BRUNO)
        with patch("occurrence_desk.views.users.update_user", return_value=renamed) as mock_update:
            assert view.save({"name": "Bruno S."}) == renamed
        mock_update.assert_called_once_with(view.api, "u2", {"name": "Bruno S."})
        assert view.users == [ANA, renamed]
        assert view.dialog_open is False
        assert view.notifications == [Notification(Level.SUCCESS, "User updated successfully!")]

    def test_save_create(self, view: UsersView) -> None:
        view.open_create()
        with patch("occurrence_desk.views.users.create_user", return_value=CARLA):
            assert view.save({"name": "Carla"}) == CARLA
        assert view.notifications[0].level == Level.SUCCESS

    def test_save_rejected_keeps_dialog_open(self, view: UsersView) -> None:
        view.open_create()
        with patch(
            "occurrence_desk.views.users.create_user",
            side_effect=ApiError("Email already in use", status_code=409),
        ):
            assert view.save({"email": "ana@example.com"}) is None
        assert view.dialog_open is True
        assert view.notifications == [Notification(Level.ERROR, "Email already in use")]

    def test_save_malformed_response_notifies(self, view: UsersView) -> None:
        view.open_edit(BRUNO)
        with patch("occurrence_desk.views.users.update_user", side_effect=_malformed_user):
            assert view.save({"name": "Bruno S."}) is None
        assert view.dialog_open is True
        assert view.notifications == [Notification(Level.ERROR, UNEXPECTED_RESPONSE)]


class TestDelete:
    """Test the confirm-before-delete flow."""

    def test_request_opens_confirmation(self, view: UsersView) -> None:
        view.request_delete("u1")
        assert view.confirm_open is True
        assert view.pending_delete_id == "u1"

    def test_confirm_removes_row(self, view: UsersView) -> None:
        view.users = [ANA, BRUNO]
        view.request_delete("u2")
        deleted = BRUNO.model_copy(update={"deleted": True})
        with patch("occurrence_desk.views.users.delete_user", return_value=deleted):
            assert view.confirm_delete() == deleted
        assert view.users == [ANA]
        assert view.confirm_open is False
        assert view.pending_delete_id is None
        assert view.drain_notifications() == [
            Notification(Level.SUCCESS, "User deleted successfully!")
        ]
        assert view.notifications == []

    def test_rejected_delete_shows_server_message(self, view: UsersView) -> None:
        view.users = [ANA]
        view.request_delete("u1")
        with patch(
            "occurrence_desk.views.users.delete_user",
            side_effect=ApiError("You cannot delete yourself", status_code=403),
        ):
            assert view.confirm_delete() is None
        assert view.users == [ANA]
        assert view.notifications == [Notification(Level.ERROR, "You cannot delete yourself")]
        assert view.confirm_open is False

    def test_malformed_delete_response_notifies(self, view: UsersView) -> None:
        view.users = [ANA]
        view.request_delete("u1")
        with patch("occurrence_desk.views.users.delete_user", side_effect=_malformed_user):
            assert view.confirm_delete() is None
        assert view.users == [ANA]
        assert view.notifications == [Notification(Level.ERROR, UNEXPECTED_RESPONSE)]
        assert view.confirm_open is False

    def test_confirm_without_pending_does_nothing(self, view: UsersView) -> None:
        with patch("occurrence_desk.views.users.delete_user") as mock_delete:
            assert view.confirm_delete() is None
        mock_delete.assert_not_called()


class TestRefreshData:
    """Test merging server results into rows."""

    def test_unknown_id_leaves_rows(self, view: UsersView) -> None:
        view.users = [ANA]
        view.refresh_data(CARLA)
        assert view.users == [ANA]

    def test_replace_does_not_mutate_previous_list(self, view: UsersView) -> None:
        rows = [ANA, BRUNO]
        view.users = rows
        view.refresh_data(BRUNO.model_copy(update={"email": "b@example.com"}))
        assert rows[1] == BRUNO
        assert view.users[1].email == "b@example.com"
