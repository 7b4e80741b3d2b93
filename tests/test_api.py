import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch, AsyncMock, MagicMock
from langchain_core.language_models import FakeListChatModel

from app.api.main import app
from app.api.v1.endpoints import get_news_checker
from app.core.models import ClassificationResult, Label
from app.services.news_checker import NewsCheckAgent

client = TestClient(app)


@pytest.fixture(autouse=True)
def reset_app_state():
    yield
    app.dependency_overrides.clear()
    if hasattr(app.state, "news_checker"):
        del app.state.news_checker


@pytest.fixture
def mock_checker():
    """
    Returns a fake checker that simulates a completed model verdict.
    """
    checker = MagicMock()
    checker.run = AsyncMock(return_value=ClassificationResult(
        label=Label.REAL,
        confidence=0.8,
        explanation="Reported by several outlets."
    ))
    app.dependency_overrides[get_news_checker] = lambda: checker
    return checker


def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "operational"
    assert data["version"] == "1.0.0"


def test_check_news_text(mock_checker):
    response = client.post("/check-news", json={"type": "text", "text": "The city opened a new bridge."})
    assert response.status_code == 200
    assert response.json() == {
        "label": "real",
        "confidence": 0.8,
        "explanation": "Reported by several outlets."
    }

    request = mock_checker.run.await_args.args[0]
    assert request.type.value == "text"
    assert request.text == "The city opened a new bridge."


def test_check_news_with_fake_model():
    """
    Runs the real agent against a fake chat model returning prose around the JSON.
    """
    llm = FakeListChatModel(responses=[
        'Here you go: {"label":"fake","confidence":0.95,"explanation":"Fabricated quote."} Hope it helps!'
    ])
    app.dependency_overrides[get_news_checker] = lambda: NewsCheckAgent(llm)

    response = client.post("/check-news", json={"type": "url", "url": "https://example.com/a"})
    assert response.status_code == 200
    assert response.json() == {
        "label": "fake",
        "confidence": 0.95,
        "explanation": "Fabricated quote."
    }


@pytest.mark.parametrize(
    "payload, detail",
    [
        ({"type": "text"}, "text is required"),
        ({"type": "text", "text": ""}, "text is required"),
        ({"type": "text", "url": "https://example.com"}, "text is required"),
        ({"type": "url", "text": "some text"}, "url is required"),
    ],
)
def test_check_news_missing_field(mock_checker, payload, detail):
    response = client.post("/check-news", json=payload)
    assert response.status_code == 400
    assert response.json()["detail"] == detail
    mock_checker.run.assert_not_called()


def test_check_news_validation_error(mock_checker):
    """
    An unknown type is rejected before the handler runs.
    """
    response = client.post("/check-news", json={"type": "video", "url": "https://example.com"})
    assert response.status_code == 422  # Unprocessable Entity due to validation error


def test_check_news_model_failure(mock_checker):
    mock_checker.run.side_effect = RuntimeError("403 API key not valid")

    response = client.post("/check-news", json={"type": "text", "text": "anything"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error: 403 API key not valid"


@patch("app.api.v1.endpoints.config")
def test_check_news_without_api_key(mock_config):
    mock_config.GEMINI_API_KEY = None

    response = client.post("/check-news", json={"type": "text", "text": "anything"})
    assert response.status_code == 500
    assert response.json()["detail"] == "Model client is not configured"


@patch("app.api.v1.endpoints.LLMWrapper")
def test_news_checker_is_built_once(mock_wrapper):
    mock_wrapper.return_value.get_llm.return_value = FakeListChatModel(responses=[
        '{"label":"uncertain","confidence":0.3,"explanation":"Not enough detail."}'
    ])

    for _ in range(2):
        response = client.post("/check-news", json={"type": "text", "text": "anything"})
        assert response.status_code == 200
        assert response.json()["label"] == "uncertain"

    mock_wrapper.assert_called_once()
    assert isinstance(app.state.news_checker, NewsCheckAgent)


@patch("app.api.v1.endpoints.config")
def test_missing_field_rejected_before_model_client(mock_config):
    mock_config.GEMINI_API_KEY = None

    response = client.post("/check-news", json={"type": "text"})
    assert response.status_code == 400
    assert response.json()["detail"] == "text is required"

    response = client.post("/check-news", json={"type": "video", "url": "https://example.com"})
    assert response.status_code == 422


def test_overflowing_confidence_serializes_as_number():
    llm = FakeListChatModel(responses=['{"label":"fake","confidence":1e400,"explanation":"x"}'])
    app.dependency_overrides[get_news_checker] = lambda: NewsCheckAgent(llm)

    response = client.post("/check-news", json={"type": "text", "text": "anything"})
    assert response.status_code == 200
    assert response.json() == {"label": "fake", "confidence": 0.0, "explanation": "x"}
