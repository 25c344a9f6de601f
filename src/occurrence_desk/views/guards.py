"""Route guards evaluated before a protected view is built.

Each guard looks at an explicit ``Session`` and returns a ``RouteDecision``;
the caller decides what to do with a redirect.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from occurrence_desk.schemas import Session

LOGIN_PATH = "/auth/login"
HOME_PATH = "/app"


@dataclass(frozen=True)
class RouteDecision:
    """Allow the view, or send the user somewhere else."""

    allowed: bool
    redirect_to: str | None = None

    @classmethod
    def allow(cls) -> RouteDecision:
        return cls(allowed=True)

    @classmethod
    def redirect(cls, path: str) -> RouteDecision:
        return cls(allowed=False, redirect_to=path)


def require_signed_in(session: Session, login_path: str = LOGIN_PATH) -> RouteDecision:
    if not session.signed:
        return RouteDecision.redirect(login_path)
    return RouteDecision.allow()


def require_admin(session: Session, fallback_path: str = HOME_PATH) -> RouteDecision:
    """Keep signed-in non-admins out of admin screens."""
    if not session.signed:
        return RouteDecision.redirect(LOGIN_PATH)
    if not session.is_admin:
        return RouteDecision.redirect(fallback_path)
    return RouteDecision.allow()


def guard(session: Session, *checks: Callable[[Session], RouteDecision]) -> RouteDecision:
    """Run checks in order; the first redirect wins."""
    for check in checks:
        decision = check(session)
        if not decision.allowed:
            return decision
    return RouteDecision.allow()
