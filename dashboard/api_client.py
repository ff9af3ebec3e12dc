"""
Backend API Client.

Thin wrapper over the graduate-application backend's JSON endpoints.
Every failure (connection problem, timeout, non-2xx status, malformed
body) is raised as ApiError carrying a single display message.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import requests

from .config import DashboardConfig

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Request failed"

RecordId = Union[int, str]


class ApiError(Exception):
    """Raised for any failed backend call; str(error) is the display message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class GradAppClient:
    """
    Client for the graduate-application backend API.

    Endpoints:
    - /api/profile (GET, PUT)
    - /api/education (GET, POST), /api/education/<id> (PUT, DELETE)
    - /api/publications (GET, POST), /api/publications/<id> (PUT, DELETE)
    - /api/applications/my (GET), /api/applications (POST),
      /api/applications/<id> (DELETE)
    - /api/match/suggestions (GET)
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: DashboardConfig) -> "GradAppClient":
        return cls(
            base_url=config.api_url,
            token=config.api_token,
            timeout=config.request_timeout,
        )

    def get_headers(self) -> Dict[str, str]:
        """Get headers for backend requests, including the bearer token if set."""
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def fetch(
        self,
        path: str,
        method: str = "GET",
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Call a backend endpoint and return its decoded JSON body.

        Args:
            path: Endpoint path, e.g. "/api/profile"
            method: HTTP method
            payload: Optional JSON body

        Returns:
            Decoded JSON; an empty dict when the body is empty or not JSON

        Raises:
            ApiError: On transport failure or a non-2xx response. The message
                is the body's "error" field when present.
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                json=payload,
                headers=self.get_headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(f"{method} {path} timed out: {e}")
            raise ApiError("Backend service timeout") from e
        except requests.exceptions.ConnectionError as e:
            logger.warning(f"{method} {path} connection failed: {e}")
            raise ApiError("Cannot connect to backend service") from e
        except requests.exceptions.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(str(e) or GENERIC_ERROR) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            message = GENERIC_ERROR
            if isinstance(data, dict) and data.get("error"):
                message = str(data["error"])
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise ApiError(message, status_code=response.status_code)

        return data

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_profile(self) -> Dict[str, Any]:
        data = self.fetch("/api/profile")
        if not isinstance(data, dict):
            return {}
        return data.get("profile") or {}

    def update_profile(self, payload: Dict[str, Any]) -> Any:
        return self.fetch("/api/profile", method="PUT", payload=payload)

    # ------------------------------------------------------------------
    # Education
    # ------------------------------------------------------------------

    def list_education(self) -> List[Dict[str, Any]]:
        return _as_list(self.fetch("/api/education"))

    def create_education(self, payload: Dict[str, Any]) -> Any:
        return self.fetch("/api/education", method="POST", payload=payload)

    def update_education(self, education_id: RecordId, payload: Dict[str, Any]) -> Any:
        return self.fetch(f"/api/education/{education_id}", method="PUT", payload=payload)

    def delete_education(self, education_id: RecordId) -> Any:
        return self.fetch(f"/api/education/{education_id}", method="DELETE")

    # ------------------------------------------------------------------
    # Publications
    # ------------------------------------------------------------------

    def list_publications(self) -> List[Dict[str, Any]]:
        return _as_list(self.fetch("/api/publications"))

    def create_publication(self, payload: Dict[str, Any]) -> Any:
        return self.fetch("/api/publications", method="POST", payload=payload)

    def update_publication(self, publication_id: RecordId, payload: Dict[str, Any]) -> Any:
        return self.fetch(f"/api/publications/{publication_id}", method="PUT", payload=payload)

    def delete_publication(self, publication_id: RecordId) -> Any:
        return self.fetch(f"/api/publications/{publication_id}", method="DELETE")

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def list_applications(self) -> List[Dict[str, Any]]:
        return _as_list(self.fetch("/api/applications/my"))

    def create_application(self, payload: Dict[str, Any]) -> Any:
        return self.fetch("/api/applications", method="POST", payload=payload)

    def delete_application(self, application_id: RecordId) -> Any:
        return self.fetch(f"/api/applications/{application_id}", method="DELETE")

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def get_suggestions(self) -> Dict[str, Any]:
        data = self.fetch("/api/match/suggestions")
        return data if isinstance(data, dict) else {}


def _as_list(data: Any) -> List[Dict[str, Any]]:
    # Empty or malformed bodies decode to {}
    if isinstance(data, list):
        return data
    return []
