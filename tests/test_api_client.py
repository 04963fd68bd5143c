"""
Unit tests for the dashboard API client
"""
import pytest
import requests
from unittest.mock import Mock
from dashboard.api_client import ApiClient, ApiError


def make_response(ok=True, status_code=200, reason="OK", payload=None):
    response = Mock(ok=ok, status_code=status_code, reason=reason)
    response.json.return_value = payload if payload is not None else {}
    return response


class TestApiClient:
    """Test cases for ApiClient."""

    def setup_method(self):
        self.session = Mock()
        self.client = ApiClient("http://api.test/", timeout=10, session=self.session)

    def test_base_url_trailing_slash(self):
        assert self.client.base_url == "http://api.test"

    def test_create_transcript(self):
        """Transcript content is posted as JSON."""
        self.session.request.return_value = make_response(
            status_code=201, payload={"message": "ok", "data": {"tasks": []}}
        )

        result = self.client.create_transcript("Meeting notes here")

        assert result["data"] == {"tasks": []}
        self.session.request.assert_called_once_with(
            "POST", "http://api.test/api/transcripts", timeout=10, json={"content": "Meeting notes here"}
        )

    def test_get_tasks_drops_empty_filters(self):
        self.session.request.return_value = make_response(payload={"data": {"tasks": [], "summary": {}}})

        self.client.get_tasks(status="PENDING", q="")

        _, kwargs = self.session.request.call_args
        assert kwargs["params"] == {"status": "PENDING"}

    def test_update_task(self):
        self.session.request.return_value = make_response(payload={"data": {"id": "t1", "status": "COMPLETED"}})

        data = self.client.update_task("t1", status="COMPLETED")

        assert data["status"] == "COMPLETED"
        self.session.request.assert_called_once_with(
            "PATCH", "http://api.test/api/tasks/t1", timeout=10, json={"status": "COMPLETED"}
        )

    def test_delete_task_returns_message(self):
        self.session.request.return_value = make_response(payload={"message": "Task deleted successfully"})
        assert self.client.delete_task("t1") == "Task deleted successfully"

    def test_error_uses_server_message(self):
        """Error responses raise ApiError with the server's error text."""
        self.session.request.return_value = make_response(
            ok=False, status_code=404, reason="Not Found", payload={"error": "Task not found"}
        )

        with pytest.raises(ApiError) as excinfo:
            self.client.get_task("missing")

        assert str(excinfo.value) == "Task not found"
        assert excinfo.value.status_code == 404

    def test_error_without_json_body(self):
        response = make_response(ok=False, status_code=502, reason="Bad Gateway")
        response.json.side_effect = ValueError("no json")
        self.session.request.return_value = response

        with pytest.raises(ApiError, match="HTTP 502: Bad Gateway"):
            self.client.get_task_stats()

    def test_network_error(self):
        self.session.request.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(ApiError, match="Network error"):
            self.client.get_transcripts()

    def test_health_check_connected(self):
        response = make_response(payload={"status": "OK", "message": "Server is running"})
        self.session.get.return_value = response

        health = self.client.health_check()

        assert health["connected"] is True
        assert health["status"] == "OK"

    def test_health_check_down(self):
        """Health check reports a dead server instead of raising."""
        self.session.get.side_effect = requests.exceptions.ConnectionError("refused")

        health = self.client.health_check()

        assert health["connected"] is False
        assert health["status"] == "DOWN"
