"""Portfolio API client.

A thin wrapper around the Portfolio REST API built on ``requests``.
It logs in with an e‑mail and password, keeps the returned bearer
token and sends it with every subsequent request.

The client exposes one method per operation:

* :meth:`login` / :meth:`logout` – obtain and revoke a token.
* :meth:`me` – the account the token belongs to.
* :meth:`list_items`, :meth:`get_item`, :meth:`create_item`,
  :meth:`update_item`, :meth:`delete_item` – CRUD on any resource
  (``membres``, ``pays``, ``projects``, ``services``).

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with the keys ``status_code``, ``message`` and ``errors``
(the field error map of a 400 response, otherwise ``None``).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class PortfolioAPI:
    """Client for interacting with the Portfolio API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``https://example.com/api``.
            token: Optional bearer token from a previous login.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Timeout in seconds for every request.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Perform an HTTP request and unwrap the response envelope.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/crud/pays``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(envelope, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return {}, None
        except requests.HTTPError as exc:
            return None, self._error_from_response(exc)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "errors": None}

    @staticmethod
    def _error_from_response(exc: requests.HTTPError) -> Error:
        response = exc.response
        status = response.status_code if response is not None else None
        message = ""
        errors = None
        if response is not None:
            try:
                body = response.json()
            except ValueError:
                message = response.text
            else:
                if isinstance(body, dict):
                    message = body.get("message") or ""
                    errors = body.get("errors")
        if not message:
            message = "Validation failed" if errors else str(exc)
        logger.error("API request failed (%s): %s", status, message)
        return {"status_code": status, "message": message, "errors": errors}

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def login(self, email: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Log in and remember the issued token.

        Returns:
            A tuple ``(user, error)``.
        """
        data, error = self._request("POST", "/auth/login", json_body={"email": email, "password": password})
        if error:
            return None, error
        self.token = data.get("token")
        return data.get("user"), None

    def logout(self) -> Tuple[bool, Optional[Error]]:
        """Revoke the current token and forget it."""
        _, error = self._request("POST", "/auth/logout")
        if error:
            return False, error
        self.token = None
        return True, None

    def me(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Return the authenticated user."""
        return self._request("GET", "/user")

    # ------------------------------------------------------------------
    # Resource operations
    # ------------------------------------------------------------------
    def list_items(self, resource: str) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve every record of ``resource``.

        Returns:
            A tuple ``(items, error)``. ``items`` is empty on failure.
        """
        data, error = self._request("GET", f"/crud/{resource}")
        if error:
            return [], error
        return data.get("data") or [], None

    def get_item(self, resource: str, item_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve a single record by ID."""
        data, error = self._request("GET", f"/crud/{resource}/{item_id}")
        if error:
            return None, error
        return data.get("data"), None

    def create_item(self, resource: str, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a record and return it."""
        data, error = self._request("POST", f"/crud/{resource}", json_body=payload)
        if error:
            return None, error
        return data.get("data"), None

    def update_item(
        self, resource: str, item_id: Any, payload: Dict[str, Any]
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace a record and return the updated version.

        ``payload`` must contain every required field.
        """
        data, error = self._request("PUT", f"/crud/{resource}/{item_id}", json_body=payload)
        if error:
            return None, error
        return data.get("data"), None

    def delete_item(self, resource: str, item_id: Any) -> Tuple[bool, Optional[Error]]:
        """Delete a record."""
        _, error = self._request("DELETE", f"/crud/{resource}/{item_id}")
        if error:
            return False, error
        return True, None
