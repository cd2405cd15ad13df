"""Space Ships API client.

A thin wrapper around the REST API served by ``space_api``.  It uses
the ``requests`` library and returns ``(data, error)`` tuples instead
of raising, so callers such as scripts or bots can report failures
without exception handling.  ``error`` is a dictionary with
``status_code`` and ``message`` keys.

Filter keyword arguments use the same camelCase names as the API
query string (``shipType``, ``minSpeed`` ...); ``None`` values are
dropped before the request is sent.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Optional[Dict[str, Any]]


class ShipsClient:
    """Client for the ship endpoints of the API."""

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
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            api_prefix: Path prefix of the versioned API.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Error]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``.  ``data`` contains the parsed JSON
            response on success and ``error`` is ``None``.  On failure,
            ``data`` is ``None`` and ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
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
                    message = str(err_json.get("detail") or err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _params(filters: Dict[str, Any]) -> Dict[str, Any]:
        params = {}
        for key, value in filters.items():
            if value is None:
                continue
            if isinstance(value, bool):
                value = "true" if value else "false"
            params[key] = value
        return params

    # ------------------------------------------------------------------
    # Ship operations
    # ------------------------------------------------------------------
    def list_ships(self, **filters: Any) -> Tuple[List[Dict[str, Any]], Error]:
        """List ships; accepts filter, ``order``, ``pageNumber`` and ``pageSize`` keywords."""
        data, error = self._request("GET", "/ships/", params=self._params(filters))
        if error:
            return [], error
        return data or [], None

    def count_ships(self, **filters: Any) -> Tuple[int, Error]:
        data, error = self._request("GET", "/ships/count", params=self._params(filters))
        if error:
            return 0, error
        return int(data), None

    def get_ship(self, ship_id: Any) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("GET", f"/ships/{ship_id}")

    def create_ship(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("POST", "/ships/", json_body=payload)

    def update_ship(self, ship_id: Any, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Send a partial update; only the keys present in ``payload`` change."""
        return self._request("POST", f"/ships/{ship_id}", json_body=payload)

    def delete_ship(self, ship_id: Any) -> Tuple[bool, Error]:
        _, error = self._request("DELETE", f"/ships/{ship_id}")
        if error:
            return False, error
        return True, None
