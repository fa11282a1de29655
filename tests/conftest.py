"""
Test fixtures for the CramMaster study API.

Provides a TestClient, clean session and timer stores, and a DynamoDB table
stand-in so no test touches the network.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient  # noqa: E402
from app.main import app  # noqa: E402
from app.services.topic_session import session_store  # noqa: E402
from app.services.timer_service import timer_store  # noqa: E402
from fakes import FakeProgressTable  # noqa: E402


SAMPLE_SYLLABUS = "1. Introduction\n- basics\n- overview\n2. SQL\n- SELECT, WHERE"


@pytest.fixture(autouse=True)
def clean_sessions():
    session_store._sessions.clear()
    timer_store._timers.clear()
    yield
    session_store._sessions.clear()
    timer_store._timers.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def sample_syllabus():
    return SAMPLE_SYLLABUS


@pytest.fixture
def progress_table():
    return FakeProgressTable()
