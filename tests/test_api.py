import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch, AsyncMock, MagicMock

from newsverdict.api.main import app
from newsverdict.api.v1.endpoints import get_analyzer
from newsverdict.core.errors import (
    InvalidResponseError,
    QuotaExceededError,
    RateLimitError,
    UpstreamError,
)
from newsverdict.services.analyzer import NewsAnalyzer
from newsverdict.services.gateway import AIGatewayClient

client = TestClient(app)

ANALYZE_URL = "/api/v1/analyze-news"


@pytest.fixture
def gateway():
    """
    Gateway stub returning a fenced reply, installed through the
    get_analyzer dependency so no request leaves the process.
    """
    stub = MagicMock()
    stub.complete = AsyncMock(
        return_value='```json\n{"verdict":"fake","confidence":150,"explanation":"x","redFlags":["a",2,"b"]}\n```'
    )
    app.dependency_overrides[get_analyzer] = lambda: NewsAnalyzer(gateway=stub)
    yield stub
    app.dependency_overrides.clear()


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "operational"
    assert data["version"] == "1.0.0"
    assert "api_configured" in data


def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_analyze_news(gateway):
    """
    Test the /analyze-news endpoint end to end with a stubbed gateway reply.
    """
    response = client.post(ANALYZE_URL, json={"text": "Scientists confirm the moon is made of cheese."})

    assert response.status_code == 200
    assert response.json() == {
        "verdict": "fake",
        "confidence": 100,
        "explanation": "x",
        "redFlags": ["a", "b"],
    }
    gateway.complete.assert_awaited_once()


def test_analyze_news_bare_json_reply(gateway):
    gateway.complete.return_value = '{"verdict":"real","confidence":64.6,"explanation":"Plausible.","redFlags":[]}'

    response = client.post(ANALYZE_URL, json={"text": "Local library extends opening hours."})

    assert response.status_code == 200
    assert response.json() == {
        "verdict": "real",
        "confidence": 65,
        "explanation": "Plausible.",
        "redFlags": [],
    }


def test_analyze_news_unparsable_reply(gateway):
    gateway.complete.return_value = "I'm not sure about this one."

    response = client.post(ANALYZE_URL, json={"text": "Something happened."})

    assert response.status_code == 200
    assert response.json() == {
        "verdict": "uncertain",
        "confidence": 50,
        "explanation": "Unable to fully analyze this content. Please try again.",
        "redFlags": [],
    }


@pytest.mark.parametrize("payload", [
    {},
    {"text": ""},
    {"text": "   \n "},
    {"text": 123},
    {"text": None},
    {"text": ["headline"]},
])
def test_analyze_news_rejects_missing_text(gateway, payload):
    response = client.post(ANALYZE_URL, json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Please provide text to analyze"}
    gateway.complete.assert_not_awaited()


def test_analyze_news_rejects_non_object_body(gateway):
    response = client.post(ANALYZE_URL, json=["not", "an", "object"])

    assert response.status_code == 400
    assert response.json() == {"error": "Please provide text to analyze"}
    gateway.complete.assert_not_awaited()


def test_analyze_news_rejects_malformed_json(gateway):
    response = client.post(
        ANALYZE_URL,
        content=b"{text: oops",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Please provide text to analyze"}
    gateway.complete.assert_not_awaited()


@patch("newsverdict.services.analyzer.sanitize_reply")
def test_rate_limit_passthrough(mock_sanitize, gateway):
    gateway.complete.side_effect = RateLimitError()

    response = client.post(ANALYZE_URL, json={"text": "Breaking news"})

    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded. Please try again later."}
    mock_sanitize.assert_not_called()


def test_quota_passthrough(gateway):
    gateway.complete.side_effect = QuotaExceededError()

    response = client.post(ANALYZE_URL, json={"text": "Breaking news"})

    assert response.status_code == 402
    assert response.json() == {"error": "AI service quota exceeded. Please try again later."}


@pytest.mark.parametrize("error, message", [
    (UpstreamError(), "Failed to analyze content"),
    (InvalidResponseError(), "Invalid AI response"),
])
def test_upstream_failures(gateway, error, message):
    gateway.complete.side_effect = error

    response = client.post(ANALYZE_URL, json={"text": "Breaking news"})

    assert response.status_code == 500
    assert response.json() == {"error": message}


def test_unexpected_error_is_generic_failure(gateway):
    gateway.complete.side_effect = RuntimeError("boom")

    response = client.post(ANALYZE_URL, json={"text": "Breaking news"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to analyze content"}


def test_missing_credential():
    """
    A gateway without an API key fails before any request is sent.
    """
    app.dependency_overrides[get_analyzer] = lambda: NewsAnalyzer(
        gateway=AIGatewayClient(api_key=None)
    )
    try:
        with patch("newsverdict.services.gateway.aiohttp.ClientSession") as mock_session:
            response = client.post(ANALYZE_URL, json={"text": "Breaking news"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "AI service is not configured"}
    mock_session.assert_not_called()


def test_cors_headers_on_response(gateway):
    response = client.post(
        ANALYZE_URL,
        json={"text": "Breaking news"},
        headers={"Origin": "https://example.com"},
    )

    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_headers_on_error(gateway):
    response = client.post(
        ANALYZE_URL,
        json={"text": ""},
        headers={"Origin": "https://example.com"},
    )

    assert response.status_code == 400
    assert response.headers["access-control-allow-origin"] == "*"


def test_cors_preflight(gateway):
    response = client.options(
        ANALYZE_URL,
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "authorization, x-client-info, apikey, content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    gateway.complete.assert_not_awaited()


def test_bare_options_is_noop(gateway):
    response = client.options(ANALYZE_URL)

    assert response.status_code == 200
    assert response.content == b""
    gateway.complete.assert_not_awaited()


def test_cors_header_without_origin(gateway):
    """Responses allow any origin even when the request sends no Origin header."""
    ok = client.post(ANALYZE_URL, json={"text": "Breaking news"})
    rejected = client.post(ANALYZE_URL, json={"text": ""})

    assert ok.headers["access-control-allow-origin"] == "*"
    assert rejected.status_code == 400
    assert rejected.headers["access-control-allow-origin"] == "*"


def test_huge_integer_confidence_is_clamped(gateway):
    gateway.complete.return_value = (
        '{"verdict": "real", "confidence": -' + "9" * 400 + ', "explanation": "ok", "redFlags": []}'
    )

    response = client.post(ANALYZE_URL, json={"text": "Breaking news"})

    assert response.status_code == 200
    assert response.json()["confidence"] == 0
