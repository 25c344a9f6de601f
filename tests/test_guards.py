"""Tests for route guards."""

from __future__ import annotations

from occurrence_desk.schemas import Role, Session
from occurrence_desk.views.guards import (
    HOME_PATH,
    LOGIN_PATH,
    RouteDecision,
    guard,
    require_admin,
    require_signed_in,
)

ANONYMOUS = Session()
STAFF = Session(signed=True, role=Role.USER, user_id="u2")
ADMIN = Session(signed=True, role=Role.ADMIN, user_id="u1")


class TestRequireSignedIn:
    """Test the authentication guard."""

    def test_anonymous_redirected_to_login(self) -> None:
        assert require_signed_in(ANONYMOUS) == RouteDecision(False, LOGIN_PATH)

    def test_signed_in_allowed(self) -> None:
        assert require_signed_in(STAFF).allowed is True

    def test_custom_login_path(self) -> None:
        assert require_signed_in(ANONYMOUS, "/login").redirect_to == "/login"


class TestRequireAdmin:
    """Test the role guard."""

    def test_admin_allowed(self) -> None:
        assert require_admin(ADMIN) == RouteDecision.allow()

    def test_staff_redirected_away(self) -> None:
        assert require_admin(STAFF).redirect_to == HOME_PATH

    def test_staff_custom_fallback(self) -> None:
        assert require_admin(STAFF, "/app/ocurrences").redirect_to == "/app/ocurrences"

    def test_anonymous_goes_to_login(self) -> None:
        assert require_admin(ANONYMOUS).redirect_to == LOGIN_PATH


class TestGuard:
    """Test chaining guards."""

    def test_first_redirect_wins(self) -> None:
        decision = guard(ANONYMOUS, require_signed_in, lambda s: RouteDecision.redirect("/other"))
        assert decision.redirect_to == LOGIN_PATH

    def test_all_pass(self) -> None:
        assert guard(ADMIN, require_signed_in, require_admin).allowed is True

    def test_no_checks_allows(self) -> None:
        assert guard(ANONYMOUS).allowed is True
