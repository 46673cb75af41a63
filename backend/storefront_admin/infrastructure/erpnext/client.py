"""ERPNext REST client — thin async wrapper over ``/api/resource``.

Uses httpx with an injectable ``AsyncClient`` so tests can plug in a
``MockTransport``. Authentication is decided per call from the caller's
session credentials:

* a session id is sent as the ``sid`` cookie;
* otherwise the API key/secret token from settings is used (admin keys for
  writes when configured, guest keys for reads).
"""

import json
import logging
import re
from typing import Any
from urllib.parse import quote

import httpx

from storefront_admin.domain.entities import SessionCredentials
from storefront_admin.domain.exceptions import BackendRequestError, ConfigurationError

logger = logging.getLogger(__name__)

BACKEND_NAME = "erpnext"

_TAG_RE = re.compile(r"<[^>]+>")
# "frappe.exceptions.DuplicateEntryError: ('Item', 'x')" → the part after the class path
_EXCEPTION_PREFIX_RE = re.compile(r"^[\w.]+(Error|Exception)\s*:\s*")


class ERPNextClient:
    """Infrastructure adapter — talks to the ERPNext resource API."""

    def __init__(
        self,
        base_url: str,
        *,
        guest_api_key: str = "",
        guest_api_secret: str = "",
        admin_api_key: str = "",
        admin_api_secret: str = "",
        timeout: float = 20.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.strip().rstrip("/")
        self._guest_token = self._token(guest_api_key, guest_api_secret)
        self._admin_token = self._token(admin_api_key, admin_api_secret)
        self._timeout = timeout
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    @staticmethod
    def _token(key: str, secret: str) -> str | None:
        if key and secret:
            return f"token {key}:{secret}"
        return None

    def _get_headers(
        self, credentials: SessionCredentials | None, *, write: bool = False
    ) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if credentials is not None and credentials.sid:
            headers["Cookie"] = f"sid={credentials.sid}"
            return headers

        token = (self._admin_token or self._guest_token) if write else self._guest_token
        if token is None:
            raise ConfigurationError(
                "erpnext_guest_api_key",
                "No ERPNext authentication available: sign in to ERPNext or set "
                "ERPNEXT_GUEST_API_KEY / ERPNEXT_GUEST_API_SECRET.",
            )
        headers["Authorization"] = token
        return headers

    def _resource_path(self, doctype: str, name: str | None = None) -> str:
        path = f"/api/resource/{quote(doctype)}"
        if name is not None:
            path += f"/{quote(name, safe='')}"
        return path

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        credentials: SessionCredentials | None,
        write: bool = False,
        params: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        if not self._base_url:
            raise ConfigurationError("erpnext_api_url", "ERPNext API URL is not configured.")
        headers = self._get_headers(credentials, write=write)
        url = f"{self._base_url}{path}"

        client = await self._get_client()
        should_close = self._http_client is None
        try:
            response = await client.request(method, url, headers=headers, params=params, json=payload)
        except httpx.TimeoutException as exc:
            logger.warning("ERPNext %s %s timed out", method, path)
            raise BackendRequestError(
                BACKEND_NAME, "ERPNext did not respond in time.", retryable=True
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("ERPNext %s %s failed: %s", method, path, exc)
            raise BackendRequestError(
                BACKEND_NAME, f"Could not reach ERPNext: {exc}", retryable=True
            ) from exc
        finally:
            if should_close:
                await client.aclose()

        logger.debug("ERPNext %s %s → %d", method, path, response.status_code)
        return response

    def _raise_backend_error(self, response: httpx.Response, fallback: str) -> None:
        """Raise BackendRequestError from a non-2xx httpx Response."""
        message = extract_error_message(response) or fallback
        logger.error("ERPNext request failed (%d): %s", response.status_code, message)
        raise BackendRequestError(
            BACKEND_NAME,
            message,
            status_code=response.status_code,
            retryable=response.status_code >= 500,
        )

    @staticmethod
    def _data(response: httpx.Response) -> Any:
        try:
            body = response.json()
        except ValueError as exc:
            raise BackendRequestError(
                BACKEND_NAME, "ERPNext returned a response that is not JSON.",
                status_code=response.status_code,
            ) from exc
        return body.get("data") if isinstance(body, dict) else None

    # ── Resource API ──

    async def list_resources(
        self,
        doctype: str,
        *,
        fields: list[str] | None = None,
        filters: list[list[Any]] | None = None,
        limit: int = 20,
        order_by: str | None = None,
        credentials: SessionCredentials | None = None,
    ) -> list[dict[str, Any]]:
        """``GET /api/resource/{doctype}`` — list records. ``limit <= 0`` means no limit param."""
        params = {"fields": json.dumps(fields or ["*"])}
        if filters:
            params["filters"] = json.dumps(filters)
        if limit > 0:
            params["limit"] = str(limit)
        if order_by:
            params["order_by"] = order_by

        response = await self._request(
            "GET", self._resource_path(doctype), credentials=credentials, params=params
        )
        if response.is_error:
            self._raise_backend_error(response, f"Failed to fetch {doctype} records from ERPNext.")
        data = self._data(response)
        return [row for row in data if isinstance(row, dict)] if isinstance(data, list) else []

    async def get_resource(
        self,
        doctype: str,
        name: str,
        *,
        credentials: SessionCredentials | None = None,
    ) -> dict[str, Any] | None:
        """``GET /api/resource/{doctype}/{name}`` — None when the record does not exist."""
        response = await self._request(
            "GET", self._resource_path(doctype, name), credentials=credentials
        )
        if response.status_code == 404:
            return None
        if response.is_error:
            self._raise_backend_error(response, f"Failed to fetch {doctype} '{name}' from ERPNext.")
        data = self._data(response)
        return data if isinstance(data, dict) else None

    async def create_resource(
        self,
        doctype: str,
        payload: dict[str, Any],
        *,
        credentials: SessionCredentials | None = None,
    ) -> dict[str, Any]:
        response = await self._request(
            "POST", self._resource_path(doctype),
            credentials=credentials, write=True, payload=payload,
        )
        if response.is_error:
            self._raise_backend_error(response, f"Failed to create {doctype} in ERPNext.")
        data = self._data(response)
        return data if isinstance(data, dict) else {}

    async def update_resource(
        self,
        doctype: str,
        name: str,
        payload: dict[str, Any],
        *,
        credentials: SessionCredentials | None = None,
    ) -> dict[str, Any] | None:
        """``PUT`` a partial document. Returns None when the record does not exist."""
        response = await self._request(
            "PUT", self._resource_path(doctype, name),
            credentials=credentials, write=True, payload=payload,
        )
        if response.status_code == 404:
            return None
        if response.is_error:
            self._raise_backend_error(response, f"Failed to update {doctype} '{name}' in ERPNext.")
        data = self._data(response)
        return data if isinstance(data, dict) else {}

    async def delete_resource(
        self,
        doctype: str,
        name: str,
        *,
        credentials: SessionCredentials | None = None,
    ) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        response = await self._request(
            "DELETE", self._resource_path(doctype, name),
            credentials=credentials, write=True,
        )
        if response.status_code == 404:
            return False
        if response.is_error:
            self._raise_backend_error(response, f"Failed to delete {doctype} '{name}' from ERPNext.")
        return True


# ── Error messages ──


def _clean(text: str) -> str:
    return _TAG_RE.sub("", text).strip()


def _server_messages(raw: Any) -> list[str]:
    """Decode ``_server_messages`` — a JSON list of JSON-encoded ``{"message": ...}`` objects."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return [_clean(raw)] if raw.strip() else []
    messages = []
    for entry in raw if isinstance(raw, list) else []:
        if isinstance(entry, str):
            try:
                entry = json.loads(entry)
            except ValueError:
                messages.append(_clean(entry))
                continue
        if isinstance(entry, dict) and entry.get("message"):
            messages.append(_clean(str(entry["message"])))
        elif isinstance(entry, str) and entry:
            messages.append(_clean(entry))
    return [m for m in messages if m]


def extract_error_message(response: httpx.Response) -> str:
    """Reduce an ERPNext error payload to readable text — never a traceback."""
    try:
        body = response.json()
    except ValueError:
        return _clean(response.text)[:300]
    if not isinstance(body, dict):
        return ""

    messages = _server_messages(body.get("_server_messages"))
    if messages:
        return " ".join(messages)

    exception = body.get("exception")
    if isinstance(exception, str) and exception.strip():
        last_line = exception.strip().splitlines()[-1]
        return _clean(_EXCEPTION_PREFIX_RE.sub("", last_line))

    message = body.get("message")
    if isinstance(message, str):
        return _clean(message)
    return ""
