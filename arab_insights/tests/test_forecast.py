from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pandas as pd
import pytest

from arab_insights.models.db.text_analysis import TextAnalysis
from arab_insights.services.forecast_service import daily_average, project

DAY_ONE = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _row(score: float, when: datetime, project_id="proj-1", user_id="user-1") -> TextAnalysis:
    return TextAnalysis(
        id=str(uuid4()),
        user_id=user_id,
        project_id=project_id,
        input_text="نص",
        sentiment="positive" if score >= 0.5 else "negative",
        sentiment_score=score,
        positive_prob=score,
        negative_prob=round(1 - score, 4),
        dialect="Non-Jordanian",
        dialect_confidence=0.0,
        model_source="MARBERT",
        created_at=when,
    )


def _seed(client, rows):
    async def insert():
        async with client.app.state.database.session() as db:
            db.add_all(rows)
            await db.commit()

    client.portal.call(insert)
    return rows


def test_forecast_averages_days_and_clamps_projection(client):
    rows = _seed(
        client,
        [
            _row(0.5, DAY_ONE),
            _row(0.7, DAY_ONE + timedelta(hours=3)),
            _row(0.7, DAY_ONE + timedelta(days=1)),
            _row(0.8, DAY_ONE + timedelta(days=2)),
            _row(0.9, DAY_ONE + timedelta(days=3)),
            _row(1.0, DAY_ONE + timedelta(days=4)),
        ],
    )

    response = client.post("/api/forecasts", json={"project_id": "proj-1", "days": 3})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"]
    assert data["analysis_id"] == rows[-1].id
    assert [p["date"] for p in data["historical"]] == [
        "2026-03-01",
        "2026-03-02",
        "2026-03-03",
        "2026-03-04",
        "2026-03-05",
    ]
    assert [p["sentiment_score"] for p in data["historical"]] == pytest.approx(
        [0.6, 0.7, 0.8, 0.9, 1.0]
    )
    assert [p["date"] for p in data["forecast"]] == [
        "2026-03-06",
        "2026-03-07",
        "2026-03-08",
    ]
    # rising trend of 0.2 a day, held at the upper bound
    assert [p["sentiment_score"] for p in data["forecast"]] == [1.0, 1.0, 1.0]
    assert all(p["is_forecast"] for p in data["forecast"])


def test_forecast_is_stored_and_listed(client):
    _seed(client, [_row(0.4, DAY_ONE + timedelta(days=i)) for i in range(5)])

    created = client.post("/api/forecasts", json={"user_id": "user-1"}).json()["data"]
    listed = client.get("/api/forecasts", params={"user_id": "user-1"}).json()["data"]

    (stored,) = listed
    assert stored["id"] == created["id"]
    assert stored["horizon_days"] == 7
    assert len(stored["forecast_json"]["forecast"]) == 7
    assert stored["end_date"].startswith("2026-03-12")
    # flat history projects flat
    assert {p["sentiment_score"] for p in created["forecast"]} == {0.4}


def test_forecast_needs_five_analyses(client):
    _seed(client, [_row(0.6, DAY_ONE + timedelta(days=i)) for i in range(4)])

    response = client.post("/api/forecasts", json={"project_id": "proj-1"})

    assert response.status_code == 400
    assert response.json()["code"] == "FORECAST_NOT_ENOUGH_DATA"


def test_forecast_requires_a_scope(client):
    response = client.post("/api/forecasts", json={"days": 3})
    assert response.status_code == 400
    assert response.json()["code"] == "SCOPE_REQUIRED"


def test_forecast_horizon_is_bounded(client):
    response = client.post("/api/forecasts", json={"project_id": "proj-1", "days": 31})
    assert response.status_code == 422


def test_falling_trend_stops_at_zero():
    daily = pd.Series(
        [0.9, 0.7, 0.5, 0.3, 0.1],
        index=["2026-03-01", "2026-03-02", "2026-03-03", "2026-03-04", "2026-03-05"],
    )

    points = project(daily, days=4)

    assert [p.sentiment_score for p in points] == [0.0, 0.0, 0.0, 0.0]
    assert points[0].date == "2026-03-06"


def test_daily_average_groups_by_utc_day():
    rows = [
        _row(0.2, DAY_ONE),
        _row(0.6, DAY_ONE + timedelta(hours=11)),  # 23:00 UTC, same day
        _row(1.0, DAY_ONE + timedelta(hours=13)),
    ]

    daily = daily_average(rows)

    assert list(daily.index) == ["2026-03-01", "2026-03-02"]
    assert daily.tolist() == pytest.approx([0.4, 1.0])
