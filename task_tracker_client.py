"""Task Tracker API client.

A thin wrapper around the REST API exposed by ``task_tracker_api``.
The client uses the ``requests`` library internally and never raises
for HTTP or network failures: every method returns a tuple
``(data, error)`` where exactly one side is meaningful.  ``error`` is a
dictionary with the keys ``status_code`` (``None`` for network
failures) and ``message``.

High‑level methods:

* :meth:`list_projects`, :meth:`create_project`
* :meth:`list_tasks`, :meth:`create_task`, :meth:`get_task`,
  :meth:`update_task`, :meth:`delete_task`
* :meth:`fetch_all_tasks`: every task of every project, as shown on
  the dashboard.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class TaskTrackerAPI:
    """Client for interacting with the Task Tracker API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8080``.
            api_prefix: Path prefix the versioned API is mounted under.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        prefix = api_prefix.strip("/")
        self.base_url = base_url.rstrip("/") + (f"/{prefix}" if prefix else "")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to the API prefix (e.g. ``/projects``).
            params: Query parameters; ``None`` values are dropped.
            json_body: JSON body to send with the request.
        Returns:
            ``(data, None)`` on success, where ``data`` is the parsed JSON
            body or ``None`` for empty responses, and ``(None, error)``
            on failure.
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params or None,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------
    def health(self) -> Result:
        return self._request("GET", "/health")

    # ------------------------------------------------------------------
    # Project operations
    # ------------------------------------------------------------------
    def list_projects(self) -> Result:
        """Retrieve all projects, most recently updated first."""
        return self._request("GET", "/projects")

    def create_project(self, name: str) -> Result:
        """Create a project.  A duplicate name yields ``status_code`` 409."""
        return self._request("POST", "/projects", json_body={"name": name})

    # ------------------------------------------------------------------
    # Task operations
    # ------------------------------------------------------------------
    def list_tasks(
        self,
        project_id: str,
        *,
        status: Optional[str] = None,
        q: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Result:
        """Retrieve one page of a project's tasks."""
        return self._request(
            "GET",
            f"/projects/{project_id}/tasks",
            params={"status": status, "q": q, "limit": limit, "offset": offset},
        )

    def create_task(
        self,
        project_id: str,
        title: str,
        *,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Result:
        body: Dict[str, Any] = {"title": title}
        if description is not None:
            body["description"] = description
        if status is not None:
            body["status"] = status
        return self._request("POST", f"/projects/{project_id}/tasks", json_body=body)

    def get_task(self, project_id: str, task_id: str) -> Result:
        return self._request("GET", f"/projects/{project_id}/tasks/{task_id}")

    def update_task(self, project_id: str, task_id: str, **changes: Any) -> Result:
        """Send a partial update; only the given keyword fields are changed.

        Accepted keywords are ``title``, ``description`` and ``status``.
        """
        return self._request("PUT", f"/projects/{project_id}/tasks/{task_id}", json_body=changes)

    def delete_task(self, project_id: str, task_id: str) -> Result:
        return self._request("DELETE", f"/projects/{project_id}/tasks/{task_id}")

    def fetch_all_tasks(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Return the tasks of every project in project order.

        Stops at the first failing request and returns ``([], error)``.
        Only the first page (server default size) of each project is
        fetched.
        """
        projects, error = self.list_projects()
        if error:
            return [], error
        tasks: List[Dict[str, Any]] = []
        for project in projects or []:
            project_tasks, error = self.list_tasks(project["id"])
            if error:
                return [], error
            tasks.extend(project_tasks or [])
        return tasks, None
