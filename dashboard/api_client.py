# dashboard/api_client.py
import logging
from typing import Any, Dict, List, Optional

import requests

from agents.config import config

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """The InsightBoard API answered with an error, or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    """Thin client for the InsightBoard REST API."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 90.0,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or config.get("API_BASE_URL")).rstrip("/")
        # Transcript submission waits on the LLM
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"API Error [{endpoint}]: {e}")
            raise ApiError(f"Network error: {e}") from e

        if not response.ok:
            try:
                message = response.json().get("error")
            except ValueError:
                message = None
            message = message or f"HTTP {response.status_code}: {response.reason}"
            logger.error(f"API Error [{endpoint}]: {message}")
            raise ApiError(message, response.status_code)

        return response.json()

    # Transcript endpoints
    def create_transcript(self, content: str) -> Dict[str, Any]:
        return self._request("POST", "/api/transcripts", json={"content": content})

    def get_transcripts(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/transcripts")["data"]

    def get_transcript(self, transcript_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/transcripts/{transcript_id}")["data"]

    def delete_transcript(self, transcript_id: str) -> str:
        return self._request("DELETE", f"/api/transcripts/{transcript_id}")["message"]

    # Task endpoints
    def get_tasks(self, **filters: Optional[str]) -> Dict[str, Any]:
        params = {key: value for key, value in filters.items() if value}
        return self._request("GET", "/api/tasks", params=params)["data"]

    def get_task(self, task_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/tasks/{task_id}")["data"]

    def update_task(self, task_id: str, **changes: Any) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/tasks/{task_id}", json=changes)["data"]

    def delete_task(self, task_id: str) -> str:
        return self._request("DELETE", f"/api/tasks/{task_id}")["message"]

    def get_task_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/api/tasks/stats")["data"]

    # Health check
    def health_check(self) -> Dict[str, Any]:
        """Never raises: reports whether the API answered."""
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=5)
            response.raise_for_status()
            return {**response.json(), "connected": True}
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Health check failed: {e}")
            return {"status": "DOWN", "message": str(e), "connected": False}
