import json

import httpx
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from arab_insights.middlewares.security import limiter
from conftest import sentiment_reply

JORDANIAN_TEXT = "هسا شو بتعمل يا زلمة"


def test_health_and_readiness(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/liveness").status_code == 204
    assert client.get("/readiness").json() == {"status": "ready"}


def test_analyze_text_stores_and_returns_result(client, fake_hf):
    response = client.post(
        "/api/analysis/text",
        json={"text": JORDANIAN_TEXT, "user_id": "user-1", "project_id": "proj-1"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    data = body["data"]
    assert data["saved"] is True
    assert data["id"]

    result = data["result"]
    assert result["sentiment"] == "positive"
    assert result["confidence"] == 0.9
    assert result["positive_prob"] == 0.9
    assert result["negative_prob"] == 0.1
    assert result["dialect"] == "Jordanian"
    assert result["dialect_indicators"][:2] == ["زلمة", "يا زلمة"]
    assert result["emotion"] == "سعادة"
    assert result["modelSource"] == "MARBERT"
    assert result["content_source"] == "direct_text"
    assert result["analyzed_text"] == JORDANIAN_TEXT
    assert result["fallback_reason"] is None

    (call,) = fake_hf.calls
    assert call.headers["Authorization"] == "Bearer hf_test_token"
    assert json.loads(call.content) == {"inputs": JORDANIAN_TEXT, "parameters": {}}


def test_stored_row_round_trips(client):
    created = client.post(
        "/api/analysis/text", json={"text": JORDANIAN_TEXT, "user_id": "user-1"}
    ).json()["data"]

    response = client.get(f"/api/analyses/{created['id']}")
    assert response.status_code == 200
    row = response.json()["data"]
    assert row["sentiment_score"] == created["result"]["confidence"]
    assert row["positive_prob"] == created["result"]["positive_prob"]
    assert row["negative_prob"] == created["result"]["negative_prob"]
    assert row["dialect_confidence"] == created["result"]["dialect_confidence"]
    assert row["emotional_markers"] == ["يا زلمة"]
    assert row["input_text"] == JORDANIAN_TEXT

    listed = client.get("/api/analyses", params={"user_id": "user-1"}).json()["data"]
    assert [r["id"] for r in listed] == [created["id"]]


def test_empty_text_is_rejected_before_any_network_call(client, fake_hf):
    response = client.post("/api/analysis/text", json={"text": "   ", "user_id": "u"})

    assert response.status_code == 400
    assert response.json() == {"error": "Text is empty.", "code": "TEXT_EMPTY"}
    assert fake_hf.calls == []


def test_too_long_text_is_rejected(make_client, fake_hf):
    client = make_client(MAX_TEXT_LENGTH=20)
    response = client.post("/api/analysis/text", json={"text": "ا" * 21})
    assert response.status_code == 400
    assert response.json()["code"] == "TEXT_TOO_LONG"
    assert fake_hf.calls == []


def test_title_and_description_are_used_without_text(client):
    response = client.post(
        "/api/analysis/text",
        json={"title": "الحكومة تعلن خطة", "description": "تفاصيل خطة الحكومة الجديدة"},
    )
    result = response.json()["data"]["result"]
    assert result["content_source"] == "title_description"
    assert result["analyzed_text"] == "الحكومة تعلن خطة. تفاصيل خطة الحكومة الجديدة"
    assert result["category"] == "politics"


def test_long_text_preview_is_truncated(client):
    text = "خبر " * 100
    result = client.post("/api/analysis/text", json={"text": text}).json()["data"]["result"]
    assert len(result["analyzed_text"]) == 203
    assert result["analyzed_text"].endswith("...")


def test_without_user_the_result_is_not_persisted(client):
    data = client.post("/api/analysis/text", json={"text": JORDANIAN_TEXT}).json()["data"]
    assert data["saved"] is False
    assert data["id"] is None


def test_unparseable_model_answer_falls_back_to_neutral(client, fake_hf):
    fake_hf.sentiment = lambda request: httpx.Response(
        200, json={"error": "Model is currently loading"}
    )

    response = client.post(
        "/api/analysis/text", json={"text": "الخدمة عادية", "user_id": "user-1"}
    )

    assert response.status_code == 200
    result = response.json()["data"]["result"]
    assert result["sentiment"] == "neutral"
    assert result["confidence"] == 0.5
    assert result["positive_prob"] == result["negative_prob"] == 0.5
    assert result["emotion"] == "محايد"
    assert result["fallback_reason"] == "unparseable_model_response"


def test_empty_model_answer_is_neutral_with_reason(client, fake_hf):
    fake_hf.sentiment = lambda request: httpx.Response(200, json=[])

    response = client.post(
        "/api/analysis/text", json={"text": "الخدمة عادية", "user_id": "user-1"}
    )

    assert response.status_code == 200
    result = response.json()["data"]["result"]
    assert result["sentiment"] == "neutral"
    assert result["emotion"] == "محايد"
    assert result["fallback_reason"] == "missing_sentiment_scores"


def test_strict_parsing_turns_bad_answer_into_bad_gateway(make_client, fake_hf):
    client = make_client(STRICT_SENTIMENT_PARSING=True)
    fake_hf.sentiment = lambda request: httpx.Response(200, json={"error": "loading"})

    response = client.post("/api/analysis/text", json={"text": "الخدمة عادية"})
    assert response.status_code == 502
    assert response.json()["code"] == "INFERENCE_RESPONSE_INVALID"


def test_upstream_failure_is_bad_gateway(client, fake_hf):
    fake_hf.sentiment = lambda request: httpx.Response(503, text="unavailable")

    response = client.post(
        "/api/analysis/text", json={"text": "الخدمة سيئة", "user_id": "user-1"}
    )

    assert response.status_code == 502
    assert response.json()["code"] == "INFERENCE_UPSTREAM_ERROR"
    assert client.get("/api/analyses", params={"user_id": "user-1"}).json()["data"] == []


def test_missing_configuration_is_server_error(make_client, fake_hf):
    client = make_client(HF_SENTIMENT_ENDPOINT=None)
    response = client.post("/api/analysis/text", json={"text": "الخدمة سيئة"})
    assert response.status_code == 500
    assert response.json()["code"] == "INFERENCE_NOT_CONFIGURED"
    assert fake_hf.calls == []


def test_negative_sentiment_emotion(client, fake_hf):
    fake_hf.sentiment = sentiment_reply(0.2, 0.8)
    result = client.post("/api/analysis/text", json={"text": "الخدمة سيئة جدا"}).json()[
        "data"
    ]["result"]
    assert result["sentiment"] == "negative"
    assert result["emotion"] == "استياء"


def test_persistence_failure_still_returns_result(client, monkeypatch):
    async def failing_commit(self):
        raise OperationalError("INSERT INTO text_analyses", {}, Exception("disk full"))

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)

    response = client.post(
        "/api/analysis/text", json={"text": JORDANIAN_TEXT, "user_id": "user-1"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["saved"] is False
    assert data["warning"]
    assert data["result"]["sentiment"] == "positive"


def test_unknown_analysis_is_not_found(client):
    response = client.get("/api/analyses/does-not-exist")
    assert response.status_code == 404
    assert response.json()["code"] == "ANALYSIS_NOT_FOUND"


def test_listing_requires_a_scope(client):
    response = client.get("/api/analyses")
    assert response.status_code == 400
    assert response.json()["code"] == "SCOPE_REQUIRED"


def test_edge_function_path_and_empty_object_answer(client, fake_hf):
    fake_hf.sentiment = lambda request: httpx.Response(200, json={})

    response = client.post("/analyze-text", json={"text": "This is English text"})

    assert response.status_code == 200
    result = response.json()
    assert "data" not in result and "status" not in result
    assert {
        "sentiment",
        "confidence",
        "positive_prob",
        "negative_prob",
        "dialect",
        "modelSource",
    } <= set(result)
    assert result["sentiment"] == "neutral"
    assert result["dialect"] == "Non-Jordanian"
    assert result["dialect_confidence"] == 0


def test_edge_function_path_reports_errors_flat(client, fake_hf):
    fake_hf.sentiment = lambda request: httpx.Response(503, text="Service Unavailable")

    response = client.post("/analyze-text", json={"text": JORDANIAN_TEXT})

    assert response.status_code == 502
    assert set(response.json()) == {"error", "code"}


def test_analyze_rate_limit_comes_from_app_settings(make_client):
    limiter.reset()
    client = make_client(RATE_LIMIT_ENABLED=True, ANALYZE_RATE_LIMIT="2/minute")
    try:
        codes = [
            client.post("/api/analysis/text", json={"text": JORDANIAN_TEXT}).status_code
            for _ in range(3)
        ]
    finally:
        limiter.enabled = False
        limiter.reset()

    assert codes == [200, 200, 429]
