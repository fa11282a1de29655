"""
API routes for the study service.
"""
from fastapi import APIRouter, BackgroundTasks, HTTPException, status
from app.models.schemas import (
    SyllabusRequest,
    SessionResponse,
    QuizSubmitRequest,
    QuizGenerateRequest,
    StudyAidsRequest,
    TimerCreateRequest,
    NotificationRequest,
    HealthCheckResponse,
    ErrorResponse
)
from app.models.progress_schemas import ProgressSaveRequest
from app.core.config import settings
from app.core.logging_config import logger
from app.services.topic_session import TopicSession, session_store
from app.services.quiz_scorer import score_quiz
from app.services.quiz_generator import quiz_generator
from app.services.progress_service import progress_service
from app.services.notification_service import notification_service
from app.services.timer_service import timer_store, topics_from_study_session
from app.utils.exceptions import NoDataError, SessionNotFoundError, TimerNotFoundError, InvalidInputError
from app.utils.response_formatter import success_envelope, format_quiz_result_message


router = APIRouter()

NOT_FOUND_RESPONSES = {404: {"model": ErrorResponse, "description": "Unknown session or topic"}}


async def _save_progress(request: ProgressSaveRequest):
    """Record a quiz attempt; failures are logged by the service."""
    success = await progress_service.save_attempt(request)
    if not success:
        logger.warning(f"[API] Progress not recorded for {request.user_id}")


def _get_session(session_id: str) -> TopicSession:
    try:
        return session_store.get(session_id)
    except SessionNotFoundError as e:
        logger.warning(f"[API] {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _session_response(session: TopicSession) -> SessionResponse:
    return SessionResponse(
        session_id=session.session_id,
        subject=session.subject,
        topics=session.list_topics()
    )


@router.get("/", response_model=dict)
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "description": settings.api_description,
        "endpoints": {
            "sessions": "/sessions",
            "quiz": "/sessions/{session_id}/quiz/{topic_index}",
            "hints": "/sessions/{session_id}/hints/{topic_index}",
            "submit": "/sessions/{session_id}/quiz/{topic_index}/submit",
            "generate": "/quiz/generate",
            "study_aids": "/hints/generate",
            "timer": "/timer",
            "progress": "/progress/{user_id}",
            "notifications": "/notifications/send",
            "health": "/health",
            "docs": "/docs"
        }
    }


@router.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """
    Health check endpoint with the state of optional integrations.
    """
    return HealthCheckResponse(
        status="healthy",
        version=settings.api_version,
        services={
            "llm": quiz_generator.describe(),
            "progress_tracking": {"status": "enabled" if progress_service.enabled else "disabled"},
            "notifications": {"channels": notification_service.configured_channels()},
            "active_sessions": len(session_store),
            "active_timers": len(timer_store)
        }
    )


@router.post("/sessions", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(request: SyllabusRequest):
    """
    Create a study session from syllabus text.

    Parses topics, detects the subject and resolves questions and hints
    for every topic.
    """
    logger.info(f"[API] Create session: {request.syllabus_content[:100]}...")
    session = session_store.create(request.syllabus_content)
    return _session_response(session)


@router.put("/sessions/{session_id}", response_model=SessionResponse, responses=NOT_FOUND_RESPONSES)
async def rebuild_session(session_id: str, request: SyllabusRequest):
    """
    Replace a session's syllabus text and rebuild all of its topic data.
    """
    session = _get_session(session_id)
    session.rebuild(request.syllabus_content)
    return _session_response(session)


@router.get("/sessions/{session_id}/topics", response_model=SessionResponse, responses=NOT_FOUND_RESPONSES)
async def list_topics(session_id: str):
    return _session_response(_get_session(session_id))


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND_RESPONSES)
async def delete_session(session_id: str):
    try:
        session_store.delete(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/sessions/{session_id}/quiz/{topic_index}", response_model=dict, responses=NOT_FOUND_RESPONSES)
async def get_quiz(session_id: str, topic_index: int):
    """
    Get the quiz questions resolved for a topic.
    """
    session = _get_session(session_id)
    try:
        return success_envelope(session.resolve_questions(topic_index))
    except NoDataError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/sessions/{session_id}/hints/{topic_index}", response_model=dict, responses=NOT_FOUND_RESPONSES)
async def get_hints(session_id: str, topic_index: int):
    """
    Get the study hints generated for a topic.
    """
    session = _get_session(session_id)
    try:
        return success_envelope(session.resolve_hints(topic_index))
    except NoDataError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/sessions/{session_id}/quiz/{topic_index}/submit",
    response_model=dict,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid answers"},
        **NOT_FOUND_RESPONSES
    }
)
async def submit_quiz(
    session_id: str,
    topic_index: int,
    request: QuizSubmitRequest,
    background_tasks: BackgroundTasks
):
    """
    Score submitted answers for a topic quiz.

    Records the attempt when a user_id is given and posts the result to the
    requested chat channels.
    """
    session = _get_session(session_id)
    try:
        quiz = session.resolve_questions(topic_index)
        result = score_quiz(quiz.topic_name, quiz.questions, request.answers)
    except NoDataError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidInputError as e:
        logger.error(f"[API] Validation error: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if request.user_id:
        background_tasks.add_task(
            _save_progress,
            progress_service.build_save_request(
                user_id=request.user_id,
                session_id=session_id,
                topic_index=topic_index,
                topic_name=result.topic_name,
                score=result.score,
                total=result.total,
                percentage=result.percentage
            )
        )

    response = success_envelope(result)
    if request.notify_channels:
        message = format_quiz_result_message(result, request.user_id)
        response["notifications"] = await notification_service.send(message, request.notify_channels)

    return response


@router.post("/quiz/generate", response_model=dict)
def generate_quiz(request: QuizGenerateRequest):
    """
    Generate a practice quiz for any topic with the LLM.

    Falls back to a fixed quiz when the LLM is not configured or fails.
    """
    logger.info(f"[API] Quiz generation request: {request.topic}")
    quiz = quiz_generator.generate(request.topic, request.question_count, request.difficulty)
    return success_envelope(quiz)


@router.post("/hints/generate", response_model=dict)
def generate_study_aids(request: StudyAidsRequest):
    """
    Generate memory techniques, study tips and quick facts for any topic.

    Falls back to fixed study aids when the LLM is not configured or fails.
    """
    logger.info(f"[API] Study aids request: {request.topic}")
    aids = quiz_generator.generate_study_aids(request.topic, request.difficulty)
    return success_envelope(aids)


@router.post("/timer", response_model=dict, status_code=status.HTTP_201_CREATED, responses=NOT_FOUND_RESPONSES)
async def create_timer(request: TimerCreateRequest):
    """
    Create a Pomodoro timer session.

    Uses the explicit topic list when given, otherwise every topic of the
    referenced study session at minutes_per_topic each.
    """
    topics = request.topics
    if not topics:
        session = _get_session(request.study_session_id)
        topics = topics_from_study_session(session, request.minutes_per_topic)
        if not topics:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Session {session.session_id} has no topics"
            )

    timer = timer_store.create(topics, request.user_id)
    return success_envelope(timer)


@router.get("/timer/{timer_id}", response_model=dict, responses=NOT_FOUND_RESPONSES)
async def get_timer(timer_id: str):
    try:
        return success_envelope(timer_store.get(timer_id))
    except TimerNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/progress/{user_id}", response_model=dict)
async def get_progress(user_id: str):
    """
    Get recorded quiz progress for a user.
    """
    summary = await progress_service.get_progress(user_id)
    return success_envelope(summary)


@router.post("/notifications/send", response_model=dict)
async def send_notification(request: NotificationRequest):
    """
    Send a message to chat webhooks.
    """
    results = await notification_service.send(request.message, request.channels)
    return success_envelope(results)
