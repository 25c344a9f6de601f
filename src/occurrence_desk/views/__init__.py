"""View controllers: UI state without a UI toolkit.

  - guards: RouteDecision, require_signed_in, require_admin, guard
  - statistics: StatisticsView (monthly statistics screen)
  - users: UsersView (user administration screen)

Controllers call datasources and analysis, hold the resulting state, and
hand plain data to renderers. Sessions are always passed in, never looked up.
"""

from occurrence_desk.views.guards import RouteDecision, guard, require_admin, require_signed_in
from occurrence_desk.views.statistics import StatisticsView, ViewState
from occurrence_desk.views.users import Notification, UsersView

__all__ = [
    "Notification",
    "RouteDecision",
    "StatisticsView",
    "UsersView",
    "ViewState",
    "guard",
    "require_admin",
    "require_signed_in",
]
