"""
Study sessions.
A TopicSession owns the syllabus text and the topic data resolved from it.
Each session keeps its own cache, rebuilt in full whenever new text is supplied.
"""
import uuid
from typing import Dict, List, Optional
from app.core.config import settings
from app.core.logging_config import logger
from app.models.schemas import (
    SubjectCategory,
    TopicRecord,
    ResolvedTopicData,
    TopicQuestions,
    TopicHints
)
from app.services.syllabus_parser import parse_syllabus
from app.services.subject_classifier import classify_subject
from app.services.question_resolver import resolve_questions
from app.services.hint_generator import generate_hints
from app.utils.exceptions import NoDataError, SessionNotFoundError


class TopicSession:
    """Topics, questions and hints derived from one syllabus text."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.source_text = ""
        self.subject = SubjectCategory.DEFAULT
        self.topics: List[TopicRecord] = []
        self._resolved: Dict[int, ResolvedTopicData] = {}

    def rebuild(self, syllabus_text: str) -> List[ResolvedTopicData]:
        """
        Replace all session state with data derived from new syllabus text.

        Args:
            syllabus_text: Raw syllabus text

        Returns:
            Resolved topic data in topic order
        """
        topics = parse_syllabus(syllabus_text)
        subject = classify_subject(syllabus_text)

        resolved = {}
        for topic in topics:
            resolved[topic.index] = ResolvedTopicData(
                name=topic.name,
                questions=resolve_questions(topic, subject),
                hints=generate_hints(topic),
                subtopics=list(topic.subtopics),
                keywords=list(topic.keywords)
            )

        # Swap in one step so readers never see a half-built cache
        self.source_text = syllabus_text
        self.subject = subject
        self.topics = topics
        self._resolved = resolved

        logger.info(
            f"[Session] {self.session_id} rebuilt: {len(topics)} topics, subject={subject.value}"
        )
        return [resolved[topic.index] for topic in topics]

    def get_topic(self, topic_index: int) -> ResolvedTopicData:
        """
        Get resolved data for a topic.

        Raises:
            NoDataError: If the index has no topic in this session
        """
        data = self._resolved.get(topic_index)
        if data is None:
            logger.warning(f"[Session] {self.session_id} has no topic {topic_index}")
            raise NoDataError(topic_index)
        return data

    def list_topics(self) -> List[TopicRecord]:
        return list(self.topics)

    def resolve_questions(self, topic_index: int) -> TopicQuestions:
        data = self.get_topic(topic_index)
        return TopicQuestions(
            topic_name=data.name,
            questions=[question.model_copy(deep=True) for question in data.questions]
        )

    def resolve_hints(self, topic_index: int) -> TopicHints:
        data = self.get_topic(topic_index)
        return TopicHints(topic_name=data.name, hints=list(data.hints))


class SessionStore:
    """In-memory registry of study sessions, oldest evicted first past max_sessions."""

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions or settings.max_sessions
        self._sessions: Dict[str, TopicSession] = {}

    def create(self, syllabus_text: str, session_id: Optional[str] = None) -> TopicSession:
        """Create a session and build it from the given text."""
        session = TopicSession(session_id or uuid.uuid4().hex)
        session.rebuild(syllabus_text)
        self._sessions.pop(session.session_id, None)
        self._sessions[session.session_id] = session
        self._evict_oldest()
        logger.info(f"[SessionStore] Created session {session.session_id}")
        return session

    def _evict_oldest(self) -> None:
        # Dicts keep insertion order, so the first key is the oldest session
        while len(self._sessions) > self.max_sessions:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logger.info(f"[SessionStore] Evicted session {oldest}")

    def get(self, session_id: str) -> TopicSession:
        """
        Look up a session.

        Raises:
            SessionNotFoundError: If the id is unknown
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def delete(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.info(f"[SessionStore] Deleted session {session_id}")

    def __len__(self) -> int:
        return len(self._sessions)


# Global session store instance
session_store = SessionStore()
