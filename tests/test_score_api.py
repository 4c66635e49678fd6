"""Tests for the /score endpoint."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)


class TestScoreEndpoint:
    def test_success(self, reply_with, valid_model_output):
        reply_with(valid_model_output)

        response = client.post("/score", json={"idea": "Voice notes for care homes"})

        assert response.status_code == 200
        result = response.json()["result"]
        assert result["score_out_of_10"] == 6
        assert result["complexity"] == "Low"
        assert result["risks"] == valid_model_output["risks"]
        assert result["iteration_delta"] is None

    def test_scenario_a_clamped(self, reply_with, valid_model_output):
        valid_model_output.update(score_out_of_10=13, complexity="medium")
        reply_with(valid_model_output)

        response = client.post("/score", json={"idea": "Dog walking app for London"})

        assert response.status_code == 200
        result = response.json()["result"]
        assert result["score_out_of_10"] == 10
        assert result["complexity"] == "Medium"

    def test_scenario_b_missing_idea(self, mock_openai):
        response = client.post("/score", json={"idea": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing idea"}
        mock_openai.chat.completions.create.assert_not_called()

    def test_whitespace_idea_with_previous_score(self, mock_openai):
        response = client.post("/score", json={"idea": "   ", "previous_score": 5})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing idea"}

    def test_unparseable_body_is_missing_idea(self, mock_openai):
        response = client.post(
            "/score", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing idea"}

    def test_empty_body_is_missing_idea(self, mock_openai):
        response = client.post("/score")

        assert response.status_code == 400
        assert response.json() == {"error": "Missing idea"}

    def test_scenario_c_delta(self, reply_with, valid_model_output):
        valid_model_output["score_out_of_10"] = 7
        reply_with(valid_model_output)

        response = client.post("/score", json={"idea": "X", "previous_score": 4})

        assert response.status_code == 200
        assert response.json()["result"]["iteration_delta"] == 3

    def test_huge_previous_score_is_ignored(self, reply_with, valid_model_output):
        reply_with(valid_model_output)

        response = client.post("/score", json={"idea": "X", "previous_score": 10**400})

        assert response.status_code == 200
        assert response.json()["result"]["iteration_delta"] is None

    def test_huge_model_score_defaults_to_five(self, reply_with, valid_model_output):
        valid_model_output["score_out_of_10"] = 10**400
        reply_with(valid_model_output)

        response = client.post("/score", json={"idea": "X"})

        assert response.status_code == 200
        assert response.json()["result"]["score_out_of_10"] == 5

    def test_scenario_d_upstream_error(self, mock_openai):
        mock_openai.chat.completions.create.side_effect = ConnectionError("Network unreachable")

        response = client.post("/score", json={"idea": "Dog walking app"})

        assert response.status_code == 500
        assert response.json() == {"error": "Network unreachable"}

    def test_scenario_e_invalid_json(self, reply_with):
        reply_with("not json")

        response = client.post("/score", json={"idea": "Dog walking app"})

        assert response.status_code == 500
        assert response.json() == {"error": "AI returned invalid JSON"}

    def test_scenario_f_incomplete(self, reply_with, valid_model_output):
        valid_model_output["summary"] = ""
        reply_with(valid_model_output)

        response = client.post("/score", json={"idea": "Dog walking app"})

        assert response.status_code == 500
        assert response.json() == {"error": "AI returned incomplete structured output"}

    def test_empty_output(self, reply_with):
        reply_with("")

        response = client.post("/score", json={"idea": "Dog walking app"})

        assert response.status_code == 500
        assert response.json() == {"error": "AI returned empty output"}

    def test_non_object_output(self, reply_with):
        reply_with('"just a string"')

        response = client.post("/score", json={"idea": "Dog walking app"})

        assert response.status_code == 500
        assert response.json() == {"error": "AI returned invalid structured output"}

    def test_unexpected_error_is_reported(self):
        with patch("app.api.score.score_idea", side_effect=KeyError()):
            response = client.post("/score", json={"idea": "Dog walking app"})

        assert response.status_code == 500
        assert response.json() == {"error": "Score failed"}

    def test_no_auth_required(self, reply_with, valid_model_output):
        reply_with(valid_model_output)

        response = client.post(
            "/score",
            json={"idea": "Dog walking app"},
            headers={"Authorization": "Bearer not-a-real-token"},
        )

        assert response.status_code == 200
