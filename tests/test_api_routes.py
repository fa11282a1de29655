"""
API tests for sessions, quizzes, hints, scoring and integrations.
"""
import httpx
from app.api import routes
from app.models.schemas import NotificationChannel
from app.services.notification_service import NotificationService
from app.services.progress_service import ProgressService
from app.services.quiz_generator import QuizGenerator
from app.utils.webhook_client import WebhookClient


def create_session(client, syllabus):
    response = client.post("/sessions", json={"syllabus_content": syllabus})
    assert response.status_code == 201
    return response.json()


def test_root_and_health(client):
    assert client.get("/").json()["name"] == "CramMaster Study API"
    assert client.get("/ping").json() == {"status": "ok"}

    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert "llm" in health["services"]


def test_create_session(client, sample_syllabus):
    body = create_session(client, sample_syllabus)

    assert body["subject"] == "database"
    assert [topic["name"] for topic in body["topics"]] == ["Introduction", "SQL"]
    assert body["topics"][1]["keywords"] == ["SELECT", "WHERE"]
    assert [topic["index"] for topic in body["topics"]] == [0, 1]


def test_quiz_and_hints(client, sample_syllabus):
    session_id = create_session(client, sample_syllabus)["session_id"]

    quiz = client.get(f"/sessions/{session_id}/quiz/1").json()
    assert quiz["success"] is True
    assert quiz["data"]["topic_name"] == "SQL"
    assert len(quiz["data"]["questions"]) == 2

    hints = client.get(f"/sessions/{session_id}/hints/0").json()
    assert hints["data"]["topic_name"] == "Introduction"
    assert len(hints["data"]["hints"]) == 6


def test_quiz_is_stable_between_calls(client, sample_syllabus):
    session_id = create_session(client, sample_syllabus)["session_id"]
    first = client.get(f"/sessions/{session_id}/quiz/0").json()
    second = client.get(f"/sessions/{session_id}/quiz/0").json()
    assert first == second


def test_unknown_topic_is_404(client):
    session_id = create_session(client, "")["session_id"]

    response = client.get(f"/sessions/{session_id}/quiz/0")
    assert response.status_code == 404
    assert "No data found for topic 0" in response.json()["detail"]

    assert client.get(f"/sessions/{session_id}/hints/0").status_code == 404


def test_unknown_session_is_404(client):
    assert client.get("/sessions/missing/quiz/0").status_code == 404
    assert client.get("/sessions/missing/topics").status_code == 404
    assert client.delete("/sessions/missing").status_code == 404


def test_rebuild_and_delete(client, sample_syllabus):
    session_id = create_session(client, sample_syllabus)["session_id"]

    rebuilt = client.put(f"/sessions/{session_id}", json={"syllabus_content": "Organic Chemistry\n- alkanes"})
    assert rebuilt.status_code == 200
    assert rebuilt.json()["subject"] == "science"
    assert client.get(f"/sessions/{session_id}/quiz/1").status_code == 404

    assert client.delete(f"/sessions/{session_id}").status_code == 204
    assert client.get(f"/sessions/{session_id}/topics").status_code == 404


def test_submit_quiz(client, sample_syllabus):
    session_id = create_session(client, sample_syllabus)["session_id"]

    response = client.post(f"/sessions/{session_id}/quiz/1/submit", json={"answers": [0, 3]})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["score"] == 1
    assert data["percentage"] == 50
    assert data["verdict"] == "good"
    assert "notifications" not in response.json()


def test_submit_too_many_answers_is_400(client, sample_syllabus):
    session_id = create_session(client, sample_syllabus)["session_id"]
    response = client.post(f"/sessions/{session_id}/quiz/1/submit", json={"answers": [0, 0, 0]})
    assert response.status_code == 400


def test_submit_records_progress_and_notifies(client, sample_syllabus, progress_table, monkeypatch):
    posted = []

    def handler(request):
        posted.append(request)
        return httpx.Response(200)

    notifier = NotificationService(
        webhook_urls={NotificationChannel.SLACK: "https://hooks.example.com/slack"},
        client=WebhookClient(transport=httpx.MockTransport(handler))
    )
    monkeypatch.setattr(routes, "notification_service", notifier)
    monkeypatch.setattr(routes, "progress_service", ProgressService(table=progress_table))

    session_id = create_session(client, sample_syllabus)["session_id"]
    response = client.post(
        f"/sessions/{session_id}/quiz/1/submit",
        json={"answers": [0, 0], "user_id": "user123", "notify_channels": ["slack"]}
    )

    assert response.status_code == 200
    assert response.json()["notifications"] == {"slack": True}
    assert len(posted) == 1
    assert b"user123 scored 2/2 (100%)" in posted[0].content

    assert progress_table.items[0]["topic_name"] == "SQL"
    assert progress_table.items[0]["percentage"] == 100

    progress = client.get("/progress/user123").json()["data"]
    assert progress["total_progress"] == 100.0
    assert progress["topics_studied"] == 1


def test_generate_quiz_fallback(client, monkeypatch):
    generator = QuizGenerator(client=None)
    generator.client = None
    monkeypatch.setattr(routes, "quiz_generator", generator)

    response = client.post("/quiz/generate", json={"topic": "Photosynthesis"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["source"] == "fallback"
    assert data["difficulty"] == "Medium"
    assert len(data["questions"]) == 3


def test_generate_quiz_validation(client):
    assert client.post("/quiz/generate", json={"topic": ""}).status_code == 422


def test_send_notification_without_config(client, monkeypatch):
    monkeypatch.setattr(routes, "notification_service", NotificationService(webhook_urls={}))

    response = client.post("/notifications/send", json={"message": "hi", "channels": ["discord"]})
    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {}}


def test_generate_study_aids_fallback(client, monkeypatch):
    generator = QuizGenerator(client=None)
    generator.client = None
    monkeypatch.setattr(routes, "quiz_generator", generator)

    response = client.post("/hints/generate", json={"topic": "Photosynthesis", "difficulty": "Easy"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["source"] == "fallback"
    assert data["difficulty"] == "Easy"
    assert data["motivation"] == "Mastering Photosynthesis will give you a strong foundation for advanced concepts!"
    assert len(data["study_tips"]) == 3


def test_generate_study_aids_validation(client):
    assert client.post("/hints/generate", json={"topic": ""}).status_code == 422


def test_create_and_fetch_timer(client):
    response = client.post("/timer", json={
        "topics": [{"topic": "Joins", "time_allocation": 50}, {"topic": "Indexes", "time_allocation": 25}],
        "user_id": "user123"
    })
    assert response.status_code == 201
    timer = response.json()["data"]
    assert timer["total_duration"] == 4500
    assert [slot["breaks"] for slot in timer["sessions"]] == [2, 1]

    fetched = client.get(f"/timer/{timer['session_id']}")
    assert fetched.status_code == 200
    assert fetched.json()["data"]["sessions"] == timer["sessions"]


def test_timer_from_study_session(client, sample_syllabus):
    session_id = create_session(client, sample_syllabus)["session_id"]

    response = client.post("/timer", json={"study_session_id": session_id, "minutes_per_topic": 30})
    assert response.status_code == 201
    slots = response.json()["data"]["sessions"]
    assert [slot["topic"] for slot in slots] == ["Introduction", "SQL"]
    assert all(slot["duration"] == 1800 for slot in slots)


def test_timer_errors(client):
    assert client.post("/timer", json={}).status_code == 422
    assert client.post("/timer", json={"study_session_id": "missing"}).status_code == 404
    assert client.get("/timer/timer_0_nobody").status_code == 404

    empty_session = create_session(client, "")["session_id"]
    assert client.post("/timer", json={"study_session_id": empty_session}).status_code == 400
