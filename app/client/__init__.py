"""Client side: API client, dataset cache, dashboard views and front-end shells."""

from app.client.api import TrackerAPIError, TrackerClient
from app.client.cache import DataCache
from app.client.frontend import FrontEnd, Notification
from app.client.quick_entry import QuickEntry
from app.client.state import ClientState
from app.client.views import DESKTOP, TABLET, DashboardView, ViewConfig, render_dashboard, sort_recent

__all__ = [
    "TrackerAPIError",
    "TrackerClient",
    "DataCache",
    "FrontEnd",
    "Notification",
    "QuickEntry",
    "ClientState",
    "DESKTOP",
    "TABLET",
    "DashboardView",
    "ViewConfig",
    "render_dashboard",
    "sort_recent",
]
