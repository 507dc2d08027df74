"""
app/services/connectivity.py

Purpose: Network availability flag

- Checked by the gateway before every request
- Can be flipped at runtime (tests, operator switch)
"""

from app.core.logging import get_logger

logger = get_logger(__name__)


class ConnectivityMonitor:
    """Tracks whether outgoing requests to the todo API are possible."""

    def __init__(self, online: bool = True):
        self._online = online

    def is_online(self) -> bool:
        return self._online

    def set_online(self, online: bool) -> None:
        if online != self._online:
            logger.info(f"Connectivity changed: {'online' if online else 'offline'}")
        self._online = online
