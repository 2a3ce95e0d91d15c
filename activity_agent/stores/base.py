"""Activity store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from activity_agent.models import ActivityContent, ActivityPage


class ActivityStore(ABC):
    """Append-only, session-scoped activity storage."""

    @abstractmethod
    async def create_activity(self, session_id: str, content: ActivityContent) -> None:
        """Record one activity for the session."""

    @abstractmethod
    async def list_activities(self, session_id: str, after: str | None = None) -> ActivityPage:
        """Return one page of activities, newest first, continuing after ``after``."""
