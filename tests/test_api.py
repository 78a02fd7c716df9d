"""Tests for the HTTP surface (FastAPI TestClient, remote service mocked)."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from config.defaults import default_app_config


def _offline_config():
    config = default_app_config()
    config.remote.enabled = False
    return config


@pytest.fixture
def client(scenario_catalog) -> TestClient:
    return TestClient(create_app(scenario_catalog, _offline_config()))


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "OK"
        assert response.json()["remote_generation"] is False


class TestGenerateEndpoint:
    def test_offline_generation(self, client):
        response = client.post("/api/generate-timetable", json={"class_id": "7C"})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["timetable"]) == 3
        assert all(e["class_id"] == "7C" for e in body["timetable"])
        assert all(e["ai_confidence_score"] == 0.75 for e in body["timetable"])
        meta = body["metadata"]
        assert meta["provenance"] == "heuristic"
        assert meta["nep_compliance_score"] == 75
        assert meta["dropped_subjects"] == []
        assert meta["fallback_reason"] == "remote generation disabled"
        assert meta["generation_time"].endswith("s")

    def test_constraints_and_preferences_accepted(self, client):
        response = client.post("/api/generate-timetable", json={
            "constraints": {"max_periods_per_day": 6, "break_duration": 10},
            "preferences": {"morning_subjects": ["Science"]},
        })
        assert response.status_code == 200

    def test_invalid_constraints_rejected(self, client):
        response = client.post("/api/generate-timetable",
                               json={"constraints": {"max_periods_per_day": 0}})
        assert response.status_code == 422

    def test_missing_key_is_503(self, scenario_catalog, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        client = TestClient(create_app(scenario_catalog, default_app_config()))
        response = client.post("/api/generate-timetable", json={})
        assert response.status_code == 503
        assert "OPENAI_API_KEY" in response.json()["detail"]

    def test_remote_generation(self, scenario_catalog, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "test-key")
        reply = {
            "timetable": [
                {"day_of_week": 1, "time_slot_id": "p1", "subject_id": "math",
                 "teacher_id": "t1", "room_suggestion": "Room 1", "compliance_note": "core"},
            ],
            "nep_compliance_score": 92,
            "optimization_notes": ["ok"],
            "multidisciplinary_sessions": [],
        }
        transport = httpx.MockTransport(lambda r: httpx.Response(
            200, json={"choices": [{"message": {"content": json.dumps(reply)}}]}))
        client = TestClient(create_app(scenario_catalog, default_app_config(), transport))

        body = client.post("/api/generate-timetable", json={}).json()
        assert body["metadata"]["provenance"] == "generated"
        assert body["metadata"]["nep_compliance_score"] == 92
        assert body["metadata"]["optimization_notes"] == ["ok"]
        assert body["timetable"][0]["ai_confidence_score"] == pytest.approx(0.92)

    def test_no_teachers_is_422(self, scenario_catalog):
        catalog = scenario_catalog.model_copy(update={"teachers": []})
        client = TestClient(create_app(catalog, _offline_config()))
        response = client.post("/api/generate-timetable", json={})
        assert response.status_code == 422


class TestAnalyzeEndpoint:
    def test_scores_posted_timetable(self, client):
        timetable = client.post("/api/generate-timetable", json={}).json()["timetable"]
        response = client.post("/api/analyze-nep-compliance", json={"timetable": timetable})
        assert response.status_code == 200
        report = response.json()
        assert report["overall_score"] == 71
        assert report["categories"]["multidisciplinary_integration"] == 33
        assert report["categories"]["holistic_development"] == 50

    def test_entries_without_school_or_class(self, client):
        """Entries from another generator carry no school/class ids."""
        entry = {"id": "ai-gen-1", "subject_id": "art", "teacher_id": "1",
                 "time_slot_id": "p1", "day_of_week": 1, "room_number": "R1",
                 "ai_confidence_score": 0.95}
        response = client.post("/api/analyze-nep-compliance", json={"timetable": [entry]})
        assert response.status_code == 200
        assert response.json()["categories"]["art_education_priority"] == 100

    def test_minimal_entries_accepted(self, client):
        entry = {"subject_id": "math", "time_slot_id": "p2", "day_of_week": 3}
        response = client.post("/api/analyze-nep-compliance", json={"timetable": [entry]})
        assert response.status_code == 200

    def test_entry_without_slot_rejected(self, client):
        response = client.post("/api/analyze-nep-compliance",
                               json={"timetable": [{"subject_id": "math", "day_of_week": 1}]})
        assert response.status_code == 422

    def test_empty_timetable(self, client):
        response = client.post("/api/analyze-nep-compliance", json={"timetable": []})
        assert response.status_code == 200
        assert response.json()["categories"]["art_education_priority"] == 0
