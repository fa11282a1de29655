"""
Tests for per-session topic caches and the session store.
"""
import pytest
from app.models.schemas import SubjectCategory
from app.services.topic_session import TopicSession, SessionStore
from app.utils.exceptions import NoDataError, SessionNotFoundError


def test_rebuild_resolves_every_topic(sample_syllabus):
    session = TopicSession("s1")
    resolved = session.rebuild(sample_syllabus)

    assert session.subject == SubjectCategory.DATABASE
    assert [data.name for data in resolved] == ["Introduction", "SQL"]
    for data in resolved:
        assert data.questions
        assert len(data.hints) >= 5


def test_resolve_questions_and_hints(sample_syllabus):
    session = TopicSession("s1")
    session.rebuild(sample_syllabus)

    quiz = session.resolve_questions(1)
    assert quiz.topic_name == "SQL"
    assert quiz.questions[0].question == "Which SQL command is used to retrieve data?"

    hints = session.resolve_hints(0)
    assert hints.topic_name == "Introduction"
    assert hints.hints[-1] == "📝 Pay attention to: basics, overview"


def test_repeated_resolution_is_identical(sample_syllabus):
    session = TopicSession("s1")
    session.rebuild(sample_syllabus)

    assert session.resolve_questions(0) == session.resolve_questions(0)
    assert session.resolve_hints(1) == session.resolve_hints(1)


def test_caller_mutation_does_not_leak_into_cache(sample_syllabus):
    session = TopicSession("s1")
    session.rebuild(sample_syllabus)

    session.resolve_questions(1).questions.clear()
    session.resolve_hints(1).hints.clear()

    assert len(session.resolve_questions(1).questions) == 2
    assert len(session.resolve_hints(1).hints) == 6


def test_empty_text_has_no_topic_zero():
    session = TopicSession("s1")
    assert session.rebuild("") == []

    with pytest.raises(NoDataError) as exc_info:
        session.resolve_questions(0)
    assert exc_info.value.topic_index == 0

    with pytest.raises(NoDataError):
        session.resolve_hints(0)


def test_out_of_range_index(sample_syllabus):
    session = TopicSession("s1")
    session.rebuild(sample_syllabus)

    for index in (2, -1, 99):
        with pytest.raises(NoDataError):
            session.resolve_questions(index)


def test_rebuild_replaces_previous_topics(sample_syllabus):
    session = TopicSession("s1")
    session.rebuild(sample_syllabus)
    session.rebuild("European History")

    assert session.subject == SubjectCategory.DEFAULT
    assert [topic.name for topic in session.list_topics()] == ["European History"]
    with pytest.raises(NoDataError):
        session.resolve_questions(1)


def test_sessions_are_isolated(sample_syllabus):
    store = SessionStore()
    first = store.create(sample_syllabus)
    second = store.create("Organic Chemistry\n- alkanes")

    assert first.session_id != second.session_id
    assert store.get(first.session_id).resolve_questions(1).topic_name == "SQL"
    assert store.get(second.session_id).resolve_questions(0).topic_name == "Organic Chemistry"
    assert len(store) == 2


def test_store_unknown_session():
    store = SessionStore()
    with pytest.raises(SessionNotFoundError):
        store.get("missing")
    with pytest.raises(SessionNotFoundError):
        store.delete("missing")


def test_store_delete(sample_syllabus):
    store = SessionStore()
    session = store.create(sample_syllabus, session_id="fixed")
    store.delete("fixed")

    assert session.session_id == "fixed"
    assert len(store) == 0


def test_store_evicts_oldest_past_limit():
    store = SessionStore(max_sessions=2)
    store.create("Trees", session_id="a")
    store.create("Graphs", session_id="b")
    store.create("Heaps", session_id="c")

    assert len(store) == 2
    with pytest.raises(SessionNotFoundError):
        store.get("a")
    assert store.get("c").list_topics()[0].name == "Heaps"


def test_store_recreated_id_counts_as_newest():
    store = SessionStore(max_sessions=2)
    store.create("Trees", session_id="a")
    store.create("Graphs", session_id="b")
    store.create("Forests", session_id="a")
    store.create("Heaps", session_id="c")

    with pytest.raises(SessionNotFoundError):
        store.get("b")
    assert store.get("a").list_topics()[0].name == "Forests"
