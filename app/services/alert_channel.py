"""
app/services/alert_channel.py

Purpose: The single error-reporting surface

- Two states: hidden, visible(message)
- New errors overwrite the message, there is no queue
- Startup failures may be suppressed while an alert is already shown
"""

from app.core.logging import get_logger

logger = get_logger(__name__)


class AlertChannel:
    """
    Shared alert region.

    Hidden --(show)--> Visible --(dismiss)--> Hidden
    """

    def __init__(self):
        self._visible = False
        self._message = ""

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def message(self) -> str:
        return self._message

    def show(self, message: str, during_init: bool = False) -> bool:
        """
        Displays message.

        Args:
            message: Text to show
            during_init: Set by the startup load. When the alert is already
                visible the second parallel failure is ignored so the first
                message stays on screen.

        Returns:
            True if the displayed message changed
        """
        if during_init and self._visible:
            logger.debug("Alert already visible during startup, ignoring")
            return False

        self._message = message
        self._visible = True
        return True

    def hide(self) -> None:
        self._message = ""
        self._visible = False

    def dismiss(self) -> None:
        """User-triggered close. No-op when nothing is shown."""
        if self._visible:
            self.hide()
