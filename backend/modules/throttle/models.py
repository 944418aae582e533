"""
Login throttling data models.
"""

from datetime import datetime, timedelta

from pydantic import BaseModel, Field


class ThrottleEntry(BaseModel):
    """Failed-attempt counter for one client key."""

    key: str = Field(..., description="Client key (derived from the IP)")
    attempts: int = Field(default=0, ge=0, description="Failed attempts in the window")
    window_start: datetime = Field(..., description="Start of the current window")

    model_config = {"frozen": True}

    def window_open(self, now: datetime, window: timedelta) -> bool:
        """Whether ``now`` still falls inside this entry's window."""
        return now < self.window_start + window
