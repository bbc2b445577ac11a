"""Transient notification timer for quest popups."""

from greenhouse_sim.core.config import QUEST_NOTIFICATION_SECONDS


class NotificationTimer:
    """Shows on trigger and hides after `duration` seconds.

    A new trigger restarts the countdown (last writer wins).
    """

    def __init__(self, duration: float = QUEST_NOTIFICATION_SECONDS) -> None:
        self.duration = duration
        self.remaining: float = 0.0
        self.visible: bool = False

    def trigger(self) -> None:
        self.visible = True
        self.remaining = self.duration

    def update(self, delta_seconds: float) -> None:
        if not self.visible:
            return
        self.remaining -= max(0.0, delta_seconds)
        if self.remaining <= 0:
            self.remaining = 0.0
            self.visible = False
