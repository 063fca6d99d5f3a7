"""Tests for the matching API."""

from fastapi.testclient import TestClient

from resultmatch.api import create_app

client = TestClient(create_app())

RESULTS = [
    {
        "homeTeamRaw": "CN Barcelona",
        "awayTeamRaw": "CN Sabadell",
        "homeScore": 12,
        "awayScore": 10,
        "status": "FT",
        "kickoffTime": "2026-10-15T18:00:00Z",
    },
    {
        "homeTeamRaw": "CN Terrassa",
        "awayTeamRaw": "CN Mataró",
        "homeScore": 8,
        "awayScore": 8,
        "status": "finished",
        "kickoffTime": "2026-10-15T18:00:00Z",
        "isChampionsLeague": True,
    },
    {"homeTeamRaw": "", "awayTeamRaw": "x", "homeScore": 1, "awayScore": 1, "kickoffTime": "2026-10-15T18:00:00Z"},
]


class TestRunMatching:
    def test_proposals(self):
        response = client.post(
            "/matching/run",
            json={
                "questions": [
                    {"match_number": 1, "home_team": "Barcelona", "away_team": "Sabadell", "has_goal_bonus": True},
                    {"match_number": 2, "home_team": "Terrassa", "away_team": "Mataro"},
                    {"match_number": 3, "home_team": "Jadran Split", "away_team": "Pro Recco"},
                    {"match_number": 4, "home_team": "", "away_team": "Pro Recco"},
                ],
                "results": RESULTS,
                "apply_window": False,
            },
        )
        assert response.status_code == 200
        body = response.json()

        assert [c["match_number"] for c in body["candidates"]] == [1, 2]
        first = body["candidates"][0]
        assert first["confidence"] == 100
        assert first["derived_outcome"] == "homeWin"
        assert first["derived_goals_home"] == "11/12"
        assert first["derived_goals_away"] == "<11"
        assert first["derived_goals_total"] == ">12"
        assert first["result"]["status"] == "finished"
        assert body["candidates"][1]["derived_outcome"] == "draw"
        assert body["candidates"][1]["derived_goals_home"] is None

        assert body["unmatched"] == [3]
        assert body["diagnostics"][0]["match_number"] == 4
        assert body["rejected_records"] == 1
        assert body["results_considered"] == 2

    def test_config_override(self):
        response = client.post(
            "/matching/run",
            json={
                "questions": [{"match_number": 1, "home_team": "Barcelona", "away_team": "Sabadell",
                               "game_type": "waterpolo", "has_goal_bonus": True}],
                "results": RESULTS[:1],
                "apply_window": False,
                "config": {"goal_buckets": {"waterpolo": {"mid_low": 9, "mid_high": 10}}},
            },
        )
        body = response.json()
        assert body["candidates"][0]["derived_goals_home"] == ">10"
        assert body["candidates"][0]["derived_goals_away"] == "9/10"

    def test_valid_slot_sharing_number_with_invalid_slot_is_unmatched(self):
        response = client.post(
            "/matching/run",
            json={
                "questions": [
                    {"match_number": 1, "home_team": "", "away_team": "Sabadell"},
                    {"match_number": 1, "home_team": "Jadran Split", "away_team": "Pro Recco"},
                ],
                "results": RESULTS[:1],
                "apply_window": False,
            },
        )
        body = response.json()
        assert body["candidates"] == []
        assert [(d["slot_index"], d["match_number"]) for d in body["diagnostics"]] == [(0, 1)]
        assert body["unmatched"] == [1]

    def test_invalid_config_rejected(self):
        response = client.post(
            "/matching/run",
            json={
                "questions": [],
                "config": {"goal_buckets": {"waterpolo": {"mid_low": 9, "mid_high": 3}}},
            },
        )
        assert response.status_code == 422

    def test_window_applied_by_default(self):
        old = dict(RESULTS[0], kickoffTime="2001-01-01T00:00:00Z")
        response = client.post(
            "/matching/run",
            json={
                "questions": [{"match_number": 1, "home_team": "Barcelona", "away_team": "Sabadell"}],
                "results": [old],
            },
        )
        body = response.json()
        assert body["candidates"] == []
        assert body["unmatched"] == [1]


class TestDefaultConfig:
    def test_get_config(self):
        response = client.get("/matching/config")
        assert response.status_code == 200
        body = response.json()
        assert body["goal_buckets"]["default"]["labels"] == ["<11", "11/12", ">12"]
        assert body["champions_league_threshold"] >= body["domestic_threshold"]
