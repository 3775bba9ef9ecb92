"""Tests for readings API, stats windows, export, dev endpoints and the home page."""

import csv
import io

import pytest
from httpx import AsyncClient

from bp_tracker.services.export import CSV_HEADER
from bp_tracker.web.page import parse_document


@pytest.mark.asyncio
async def test_stats_empty(client: AsyncClient):
    resp = await client.get("/api/stats")
    assert resp.status_code == 200
    data = resp.json()
    assert data["last_reading"] is None
    assert data["seven_day_avg"] is None
    assert data["thirty_day_avg"] is None
    assert data["all_time_avg"] is None
    assert data["all_time_count"] == 0


@pytest.mark.asyncio
async def test_stats_after_seed(client: AsyncClient):
    resp = await client.post("/api/dev/seed")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Successfully seeded 12 readings"

    data = (await client.get("/api/stats")).json()
    assert data["seven_day_count"] == 4
    assert data["thirty_day_count"] == 8
    assert data["all_time_count"] == 12
    assert data["seven_day_avg"] == {"systolic": 129, "diastolic": 84, "pulse": 72}
    assert data["last_reading"]["systolic"] == 141


@pytest.mark.asyncio
async def test_list_readings_newest_first(client: AsyncClient):
    await client.post("/api/dev/seed")
    resp = await client.get("/api/readings")
    assert resp.status_code == 200
    items = resp.json()
    assert len(items) == 12
    timestamps = [r["timestamp"] for r in items]
    assert timestamps == sorted(timestamps, reverse=True)
    assert set(items[0]) == {"id", "timestamp", "systolic", "diastolic", "pulse", "classification"}


@pytest.mark.asyncio
async def test_delete_reading(client: AsyncClient, session_values):
    await client.post("/submit", json=session_values(120, 78, 70))
    rid = (await client.get("/api/readings")).json()[0]["id"]
    resp = await client.delete(f"/api/readings/{rid}")
    assert resp.status_code == 200
    assert resp.json() == {"message": f"Successfully deleted reading {rid}"}
    assert (await client.get("/api/readings")).json() == []


@pytest.mark.asyncio
async def test_delete_missing_reading(client: AsyncClient):
    resp = await client.delete("/api/readings/9999")
    assert resp.status_code == 404
    assert "no reading found with id 9999" in resp.json()["error"]


@pytest.mark.asyncio
async def test_delete_bad_id(client: AsyncClient):
    resp = await client.delete("/api/readings/abc")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid reading ID format"}


@pytest.mark.asyncio
async def test_clear(client: AsyncClient):
    await client.post("/api/dev/seed")
    resp = await client.post("/api/dev/clear")
    assert resp.status_code == 200
    assert (await client.get("/api/readings")).json() == []


@pytest.mark.asyncio
async def test_export_csv(client: AsyncClient, session_values):
    await client.post("/submit", json=session_values(131, 85, 77))
    stored = (await client.get("/api/readings")).json()[0]["timestamp"]
    resp = await client.get("/export/csv")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "blood_pressure_readings.csv" in resp.headers["content-disposition"]
    rows = list(csv.reader(io.StringIO(resp.text)))
    assert rows[0] == CSV_HEADER
    assert rows[1] == [stored[:10], stored[11:19], "131", "85", "77", "Hypertension Stage 1"]


@pytest.mark.asyncio
async def test_home_page_without_readings(client: AsyncClient):
    resp = await client.get("/")
    assert resp.status_code == 200
    document = parse_document(resp.text)
    assert document.select_one("#readingForm") is not None
    assert document.select(".stat-card") == []
    assert "hidden" in document.select_one(".last-reading")["class"]


@pytest.mark.asyncio
async def test_home_page_renders_stats(client: AsyncClient):
    await client.post("/api/dev/seed")
    document = parse_document((await client.get("/")).text)
    cards = document.select(".stat-card")
    assert [c.h3.get_text() for c in cards] == ["7-Day Average", "30-Day Average", "All-Time Average"]
    assert cards[0].find_all("p")[0].get_text() == "129/84 mmHg"
    assert cards[0].find_all("p")[1].get_text() == "Pulse: 72 bpm"
    assert document.select_one(".last-reading-classification").get_text() == "Hypertension Stage 2"


@pytest.mark.asyncio
async def test_health_and_security_headers(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers["x-content-type-options"] == "nosniff"
    assert resp.headers["x-frame-options"] == "DENY"


@pytest.mark.asyncio
async def test_static_stylesheet(client: AsyncClient):
    resp = await client.get("/static/style.css")
    assert resp.status_code == 200
    assert ".stat-card" in resp.text
