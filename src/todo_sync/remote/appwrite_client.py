# src/todo_sync/remote/appwrite_client.py

"""Small Appwrite REST client: current account + document create/update.

Only the calls the app needs are implemented. Authentication is either a user
JWT (`X-Appwrite-JWT`, the normal case for a signed-in user) or a server API
key (`X-Appwrite-Key`, for scripts). A server key has no account, so `/account`
rejects it; callers using a key pass the user identity in from configuration.
Every failure is translated into the app's error types so callers never see
httpx exceptions. `timeout_seconds` bounds each call as a whole, not only each
connect/read/write phase.
"""

from __future__ import annotations

import logging
import time
import uuid
from json import loads
from typing import Any

import httpx

from ..core.errors import AuthenticationError, RemoteError
from ..core.ports import DocumentData
from ..tasks.task_models import UserIdentity

logger = logging.getLogger(__name__)


def new_document_id() -> str:
    """Fresh globally unique document id (Appwrite accepts up to 36 chars, [a-zA-Z0-9._-])."""
    return uuid.uuid4().hex


class AppwriteClient:
    def __init__(
        self,
        endpoint: str,
        project_id: str,
        database_id: str,
        *,
        jwt: str | None = None,
        api_key: str | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
        user_agent: str = "todo-sync/0.1",
    ) -> None:
        if not endpoint or not endpoint.strip():
            raise ValueError("Appwrite endpoint is required")
        if not project_id or not database_id:
            raise ValueError("Both project_id and database_id are required")

        headers = {
            "X-Appwrite-Project": project_id,
            "Content-Type": "application/json",
            "User-Agent": user_agent,
        }
        if jwt:
            headers["X-Appwrite-JWT"] = jwt
        elif api_key:
            headers["X-Appwrite-Key"] = api_key

        self.endpoint = endpoint.rstrip("/")
        self.project_id = project_id
        self.database_id = database_id
        self.timeout_seconds = float(timeout_seconds)
        self._client = httpx.Client(
            base_url=self.endpoint,
            timeout=httpx.Timeout(timeout_seconds),
            headers=headers,
            transport=transport,
        )

        logger.info(
            "AppwriteClient ready endpoint=%s project=%s database=%s auth=%s timeout=%ss",
            self.endpoint,
            project_id,
            database_id,
            "jwt" if jwt else ("api_key" if api_key else "none"),
            timeout_seconds,
        )

    def close(self) -> None:
        self._client.close()
        logger.debug("Closed Appwrite HTTP client endpoint=%s", self.endpoint)

    def __enter__(self) -> AppwriteClient:
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    # Public API

    def current_user(self) -> UserIdentity:
        try:
            data = self._request("GET", "/account")
        except RemoteError as e:
            raise AuthenticationError(f"could not resolve current user: {e}") from e

        try:
            return UserIdentity.from_account(data)
        except ValueError as e:
            raise AuthenticationError(str(e)) from e

    def create_document(self, collection_id: str, data: DocumentData) -> str:
        document_id = new_document_id()
        response = self._request(
            "POST",
            self._documents_path(collection_id),
            json={"documentId": document_id, "data": data},
        )
        remote_id = str(response.get("$id") or "")
        if not remote_id:
            raise RemoteError(f"create_document: response has no $id (collection={collection_id})")

        logger.debug("Created document collection=%s id=%s", collection_id, remote_id)
        return remote_id

    def update_document(self, collection_id: str, document_id: str, data: DocumentData) -> None:
        if not document_id:
            raise ValueError("document_id is required")
        self._request(
            "PATCH",
            f"{self._documents_path(collection_id)}/{document_id}",
            json={"data": data},
        )
        logger.debug("Updated document collection=%s id=%s fields=%s", collection_id, document_id, sorted(data))

    # Internals

    def _documents_path(self, collection_id: str) -> str:
        if not collection_id:
            raise ValueError("collection_id is required")
        return f"/databases/{self.database_id}/collections/{collection_id}/documents"

    def _request(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        # httpx timeouts apply per phase; the deadline bounds the whole call.
        deadline = time.monotonic() + self.timeout_seconds
        try:
            with self._client.stream(method, url, json=json) as response:
                body = self._read_before(response, deadline)
        except httpx.TimeoutException as exc:
            logger.error("Appwrite request timed out method=%s url=%s", method, url)
            raise RemoteError(f"{method} {url} timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("Appwrite API transport error method=%s url=%s error=%s", method, url, exc)
            raise RemoteError(f"{method} {url} failed: {exc}") from exc

        status_code = response.status_code
        if response.is_error:
            detail = body.decode("utf-8", errors="replace")
            logger.error(
                "Appwrite API status error method=%s url=%s status=%s detail=%s",
                method,
                url,
                status_code,
                detail,
            )
            raise RemoteError(f"{method} {url} failed ({status_code}): {detail}", status_code=status_code)

        logger.debug("Appwrite request ok method=%s url=%s status=%s", method, url, status_code)
        if not body:
            return {}
        try:
            payload = loads(body)
        except ValueError as exc:
            raise RemoteError(f"{method} {url}: response is not JSON") from exc
        return payload if isinstance(payload, dict) else {}

    @staticmethod
    def _read_before(response: httpx.Response, deadline: float) -> bytes:
        chunks: list[bytes] = []
        for chunk in response.iter_bytes():
            if time.monotonic() > deadline:
                raise httpx.ReadTimeout("total request deadline exceeded", request=response.request)
            chunks.append(chunk)
        if time.monotonic() > deadline:
            raise httpx.ReadTimeout("total request deadline exceeded", request=response.request)
        return b"".join(chunks)
