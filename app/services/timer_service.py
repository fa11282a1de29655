"""
Pomodoro timer sessions.
Splits the minutes allocated to each topic into a study slot with one break
per full pomodoro, and keeps the resulting plans in memory.
"""
import time
from typing import Dict, List, Optional
from app.core.config import settings
from app.core.logging_config import logger
from app.models.schemas import TimerTopic, TimerSlot, TimerSession
from app.services.topic_session import TopicSession
from app.utils.exceptions import TimerNotFoundError


def build_slots(topics: List[TimerTopic]) -> List[TimerSlot]:
    """One pending slot per topic, duration in seconds."""
    return [
        TimerSlot(
            id=f"session_{position}",
            topic=topic.topic,
            duration=topic.time_allocation * 60,
            breaks=topic.time_allocation // settings.pomodoro_minutes
        )
        for position, topic in enumerate(topics)
    ]


def topics_from_study_session(session: TopicSession, minutes_per_topic: int) -> List[TimerTopic]:
    """Give every parsed topic of a study session the same allocation."""
    return [
        TimerTopic(topic=topic.name or f"Topic {topic.index + 1}", time_allocation=minutes_per_topic)
        for topic in session.list_topics()
    ]


class TimerStore:
    """In-memory registry of timer sessions."""

    def __init__(self, max_timers: Optional[int] = None):
        self.max_timers = max_timers or settings.max_sessions
        self._timers: Dict[str, TimerSession] = {}

    def _new_id(self, user_id: Optional[str]) -> str:
        millis = int(time.time() * 1000)
        owner = user_id or "anonymous"
        while f"timer_{millis}_{owner}" in self._timers:
            millis += 1
        return f"timer_{millis}_{owner}"

    def create(self, topics: List[TimerTopic], user_id: Optional[str] = None) -> TimerSession:
        """
        Build and store a timer session.

        Args:
            topics: Topics with their minute allocations
            user_id: Owner, part of the generated id

        Returns:
            TimerSession with slots in topic order
        """
        slots = build_slots(topics)
        timer = TimerSession(
            session_id=self._new_id(user_id),
            user_id=user_id,
            sessions=slots,
            total_duration=sum(slot.duration for slot in slots)
        )
        self._timers[timer.session_id] = timer

        while len(self._timers) > self.max_timers:
            del self._timers[next(iter(self._timers))]

        logger.info(
            f"[Timer] Created {timer.session_id}: {len(slots)} slots, {timer.total_duration}s total"
        )
        return timer

    def get(self, timer_id: str) -> TimerSession:
        """
        Look up a timer session.

        Raises:
            TimerNotFoundError: If the id is unknown
        """
        timer = self._timers.get(timer_id)
        if timer is None:
            raise TimerNotFoundError(timer_id)
        return timer

    def __len__(self) -> int:
        return len(self._timers)


# Global timer store instance
timer_store = TimerStore()
