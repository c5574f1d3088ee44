import asyncio

import httpx
from fastapi.testclient import TestClient

from arab_insights.main import create_app
from conftest import make_settings, sentiment_reply

ARTICLE_BODY = (
    "أعلنت الحكومة الأردنية اليوم عن خطة اقتصادية جديدة تهدف إلى دعم المشاريع "
    "الصغيرة في عمان والزرقاء وإربد. وقال الوزير إن الخطة ستوفر فرص عمل للشباب "
    "خلال العام المقبل. وأكد أن الحكومة ملتزمة بتحسين الرواتب ومكافحة البطالة في "
    "جميع المحافظات."
)
PAYWALLED = {
    "title": "ارتفاع أسعار الوقود في الأردن للشهر الثالث على التوالي",
    "description": "قررت لجنة تسعير المشتقات النفطية رفع أسعار البنزين والديزل اعتبارا من يوم الجمعة.",
    "content": "ONLY AVAILABLE IN PAID PLANS",
}


def _ingest(client, articles, project_id="proj-1", user_id="user-1"):
    response = client.post(
        "/api/articles",
        json={"project_id": project_id, "user_id": user_id, "articles": articles},
    )
    assert response.status_code == 201
    return [a["id"] for a in response.json()["data"]]


def test_batch_analyses_usable_articles_and_isolates_failures(client, fake_hf):
    ids = _ingest(
        client,
        [
            {"title": "خطة اقتصادية", "content": ARTICLE_BODY},
            PAYWALLED,
            {"url": "https://example.com/empty"},
        ],
    )

    response = client.post(
        "/api/analysis/batch", json={"project_id": "proj-1", "user_id": "user-1"}
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert (data["processed"], data["errors"], data["total"]) == (2, 1, 3)

    by_id = {r["article_id"]: r for r in data["results"]}
    assert by_id[ids[0]]["content_source"] == "content"
    assert by_id[ids[0]]["saved"] is True
    assert by_id[ids[0]]["result"]["sentiment"] == "positive"
    assert by_id[ids[1]]["content_source"] == "title_description"
    assert by_id[ids[2]]["success"] is False
    assert by_id[ids[2]]["error_code"] == "NO_USABLE_CONTENT"
    assert len(fake_hf.calls) == 2

    analyzed = client.get(
        "/api/articles", params={"project_id": "proj-1", "analyzed": True}
    ).json()["data"]
    assert {a["id"] for a in analyzed} == {ids[0], ids[1]}
    assert all(a["sentiment"] == "positive" for a in analyzed)

    stored = client.get("/api/analyses", params={"project_id": "proj-1"}).json()["data"]
    assert {r["article_id"] for r in stored} == {ids[0], ids[1]}

    # already analysed articles are skipped on the next run
    again = client.post(
        "/api/analysis/batch", json={"project_id": "proj-1", "user_id": "user-1"}
    ).json()["data"]
    assert (again["processed"], again["total"]) == (0, 1)


def test_batch_upstream_failure_only_fails_that_item(client, fake_hf):
    _ingest(client, [{"content": ARTICLE_BODY}, PAYWALLED])

    fake_hf.sentiment = lambda request: httpx.Response(500, text="boom")
    data = client.post(
        "/api/analysis/batch", json={"project_id": "proj-1", "user_id": "user-1"}
    ).json()["data"]

    assert data["processed"] == 0
    assert data["errors"] == 2
    assert {r["error_code"] for r in data["results"]} == {"INFERENCE_FAILED"}


def test_batch_rejects_too_many_ids(client):
    response = client.post(
        "/api/analysis/batch",
        json={
            "project_id": "proj-1",
            "user_id": "user-1",
            "article_ids": [f"a{i}" for i in range(21)],
        },
    )
    assert response.status_code == 400
    assert response.json()["code"] == "BATCH_TOO_LARGE"


def test_batch_with_nothing_to_do(client, fake_hf):
    data = client.post(
        "/api/analysis/batch", json={"project_id": "empty", "user_id": "user-1"}
    ).json()
    assert data["data"]["total"] == 0
    assert fake_hf.calls == []


def test_stats_aggregate_counts_and_percentages(client, fake_hf):
    for text in ("خبر سعيد جدا", "يوم جميل في عمان"):
        client.post("/api/analysis/text", json={"text": text, "user_id": "user-1"})
    fake_hf.sentiment = sentiment_reply(0.1, 0.9)
    client.post("/api/analysis/text", json={"text": "خبر حزين جدا", "user_id": "user-1"})
    client.post("/api/analysis/text", json={"text": "خبر لمستخدم آخر", "user_id": "user-2"})

    response = client.get("/api/analyses/stats", params={"user_id": "user-1"})

    assert response.status_code == 200
    stats = response.json()["data"]
    assert stats["total"] == 3
    assert stats["sentiment"]["counts"] == {"positive": 2, "negative": 1}
    assert stats["sentiment"]["percentages"] == {"positive": 66.7, "negative": 33.3}
    assert stats["dialect"]["counts"] == {"Non-Jordanian": 3}
    assert stats["average_confidence"] == 0.9
    (day,) = stats["timeline"]
    assert (day["positive"], day["negative"], day["neutral"]) == (2, 1, 0)


def test_stats_for_unknown_scope_are_empty(client):
    stats = client.get("/api/analyses/stats", params={"project_id": "nope"}).json()["data"]
    assert stats["total"] == 0
    assert stats["timeline"] == []
    assert stats["sentiment"] == {"counts": {}, "percentages": {}}


def test_batch_keeps_remote_calls_within_concurrency(tmp_path):
    in_flight = 0
    peak = 0

    async def slow_model(request):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.02)
        in_flight -= 1
        return sentiment_reply(0.8, 0.2)(request)

    app = create_app(
        make_settings(tmp_path, BATCH_CONCURRENCY=2),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(slow_model)),
    )
    with TestClient(app) as client:
        _ingest(
            client,
            [{"title": f"خبر {i}", "content": ARTICLE_BODY} for i in range(5)],
        )
        response = client.post(
            "/api/analysis/batch", json={"project_id": "proj-1", "user_id": "user-1"}
        )

    assert response.status_code == 200
    assert response.json()["data"]["processed"] == 5
    assert peak == 2
