import json

import pytest

SAMPLE_QUESTIONS = {
    1: [
        {
            "id": f"d1-q{i}",
            "domainId": 1,
            "question": f"Cloud concepts question {i}",
            "options": {"A": "a", "B": "b", "C": "c", "D": "d"},
            "answer": "A",
            "explanation": "Because.",
            "source": "sample",
            "isMultiAnswer": False,
        }
        for i in range(1, 6)
    ],
    2: [
        {
            "id": f"d2-q{i}",
            "domainId": 2,
            "question": f"Security question {i}",
            "options": {"A": "a", "B": "b", "C": "c", "D": "d", "E": "e"},
            "answer": ["A", "C"],
            "isMultiAnswer": True,
        }
        for i in range(1, 4)
    ],
}


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks HOME to a temp dir so no real config file is picked up."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def question_dir(tmp_path):
    """A question bank directory with domain1.json and domain2.json."""
    d = tmp_path / "questions"
    d.mkdir()
    for domain_id, questions in SAMPLE_QUESTIONS.items():
        (d / f"domain{domain_id}.json").write_text(json.dumps(questions), encoding="utf-8")
    return d


@pytest.fixture
def mastery_file(tmp_path):
    """A mastery store with rows for two users."""
    rows = [
        {
            "user_id": "alice",
            "question_id": "d1-q1",
            "correct_streak": 0,
            "last_was_wrong": True,
            "last_seen_at": "2025-01-03T09:00:00+00:00",
            "is_mastered": False,
            "in_exclusion_window": False,
            "weight": 8,
        },
        {
            "user_id": "alice",
            "question_id": "d1-q2",
            "correct_streak": 3,
            "last_was_wrong": False,
            "last_seen_at": "2025-01-02T09:00:00+00:00",
            "is_mastered": True,
            "in_exclusion_window": True,
            "weight": None,
        },
        {
            "user_id": "bob",
            "question_id": "d1-q3",
            "correct_streak": 1,
            "last_was_wrong": False,
            "last_seen_at": "2025-01-01T09:00:00+00:00",
            "is_mastered": False,
            "in_exclusion_window": False,
            "weight": 3,
        },
    ]
    path = tmp_path / "mastery.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path
