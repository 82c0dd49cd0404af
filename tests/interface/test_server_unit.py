from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient

from cloudpass.consts import VERSION
from cloudpass.domain.practice.models import MasteryStats, Question, SelectionResult
from cloudpass.domain.practice.ports import MasteryStoreError, QuestionBankError
from cloudpass.server import app

client = TestClient(app)


def _service(**methods):
    service = MagicMock()
    for name, value in methods.items():
        setattr(service, name, value)
    return service


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == VERSION


def test_get_version():
    response = client.get("/version")
    assert response.status_code == 200
    assert response.json() == {"version": VERSION}


@patch("cloudpass.server.get_practice_service")
def test_select_endpoint(mock_factory, mock_home):
    start = AsyncMock(
        return_value=SelectionResult(
            questions=[Question(id="q1", domain_id=1, text="What is IaaS?", answer="B")],
            stats=MasteryStats(new=3, struggling=1),
        )
    )
    mock_factory.return_value = _service(start_session=start)

    response = client.post("/practice/select", json={"domain_id": 1, "count": 1, "user_id": "alice"})

    assert response.status_code == 200
    data = response.json()
    assert [q["id"] for q in data["questions"]] == ["q1"]
    assert data["stats"] == {"new": 3, "learning": 0, "struggling": 1, "mastered": 0}
    start.assert_awaited_once_with(1, 1, "alice")


@patch("cloudpass.server.get_practice_service")
def test_select_defaults_to_session_size(mock_factory, mock_home):
    start = AsyncMock(return_value=SelectionResult(questions=[]))
    mock_factory.return_value = _service(start_session=start)

    response = client.post("/practice/select", json={"domain_id": 2})

    assert response.status_code == 200
    assert response.json() == {"questions": [], "stats": None}
    start.assert_awaited_once_with(2, 10, None)


def test_select_rejects_negative_count():
    response = client.post("/practice/select", json={"domain_id": 1, "count": -1})
    assert response.status_code == 422


@patch("cloudpass.server.get_practice_service")
def test_select_unknown_domain(mock_factory, mock_home):
    start = AsyncMock(side_effect=QuestionBankError("Unknown domain: 9"))
    mock_factory.return_value = _service(start_session=start)

    response = client.post("/practice/select", json={"domain_id": 9, "count": 5})

    assert response.status_code == 404
    assert "Unknown domain" in response.json()["detail"]


@patch("cloudpass.server.get_practice_service")
def test_stats_endpoint(mock_factory, mock_home):
    stats = AsyncMock(return_value=MasteryStats(new=2, learning=1, mastered=4))
    mock_factory.return_value = _service(domain_stats=stats)

    response = client.get("/practice/stats/1", params={"user_id": "alice"})

    assert response.status_code == 200
    assert response.json() == {"new": 2, "learning": 1, "struggling": 0, "mastered": 4}


@patch("cloudpass.server.get_practice_service")
def test_stats_store_unavailable(mock_factory, mock_home):
    stats = AsyncMock(side_effect=MasteryStoreError("locked"))
    mock_factory.return_value = _service(domain_stats=stats)

    response = client.get("/practice/stats/1", params={"user_id": "alice"})

    assert response.status_code == 503
