"""HTTP client for the comments REST API.

Speaks the wire format served by ``canopy.interface.api.routes.comments``:

    GET    /comments/{entity_id}
    POST   /comments/{entity_id}
    DELETE /comments/{entity_id}/{comment_id}
"""

from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx
import logfire

from canopy.adapter.error import CommentApiError
from canopy.application.usecase.comment.wire import CommentWire
from canopy.domain.model import Comment
from canopy.domain.value import CommentId, EntityId
from canopy.util.time import fallback_anchor


class CommentApiClient:
    """Async client for the comments backend."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        auth_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize comments API client.

        Args:
            base_url: API base URL, e.g. http://localhost:8000
            timeout_seconds: Request timeout
            auth_token: JWT sent as the auth_token cookie on writes
            transport: Optional httpx transport (tests)
        """
        cookies = {"auth_token": auth_token} if auth_token else None
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            cookies=cookies,
            transport=transport,
        )

    async def __aenter__(self) -> "CommentApiClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logfire.warn(
                "Comments API request failed", method=method, url=url, error=str(e)
            )
            raise CommentApiError(f"{method} {url} failed: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_error:
            raise CommentApiError(
                f"{response.request.method} {response.request.url.path} "
                f"returned {response.status_code}",
                status_code=response.status_code,
            )

    @staticmethod
    def _unexpected_body(response: httpx.Response, detail: str) -> CommentApiError:
        logfire.warn(
            "Unexpected comments API response",
            path=response.request.url.path,
            status_code=response.status_code,
            detail=detail,
        )
        return CommentApiError(
            f"{response.request.method} {response.request.url.path} "
            f"returned an unexpected body: {detail}",
            status_code=response.status_code,
        )

    def _json(self, response: httpx.Response) -> Any:
        """Decode a successful response body.

        Raises:
            CommentApiError: If the body is not JSON (e.g. a proxy error page)
        """
        self._raise_for_status(response)
        try:
            return response.json()
        except ValueError as e:
            raise self._unexpected_body(response, "not JSON") from e

    async def list_comments(self, entity_id: EntityId) -> list[Comment]:
        """Fetch the flat comment list of an entity.

        Items that cannot be parsed are skipped rather than failing the fetch.
        Undated items are placed before the oldest dated one.

        Raises:
            CommentApiError: On network failure, error response or a body
                that is not a comment list
        """
        response = await self._request("GET", f"/comments/{quote(entity_id, safe='')}")
        body = self._json(response)

        # The legacy backend wrapped the list as {"comments": [...]}
        items = body.get("comments") if isinstance(body, dict) else body
        if not isinstance(items, list):
            raise self._unexpected_body(response, "not a comment list")

        anchor = fallback_anchor(
            item.get("date") for item in items if isinstance(item, dict)
        )
        comments: list[Comment] = []
        for item in items:
            try:
                wire = CommentWire.model_validate(item, context={"date_anchor": anchor})
                comments.append(wire.to_comment(entity_id))
            except ValueError as e:
                logfire.warn(
                    "Skipping malformed comment", entity_id=entity_id, error=str(e)
                )
        return comments

    async def create_comment(
        self,
        entity_id: EntityId,
        text: str,
        parent_id: CommentId | None = None,
        author: str | None = None,
        user_id: str | None = None,
    ) -> Comment:
        """Post a comment or a reply.

        Raises:
            CommentApiError: On network failure, error response or a body
                that is not the created comment
        """
        payload: dict[str, Any] = {"comment": text, "parentId": parent_id}
        if author is not None:
            payload["author"] = author
        if user_id is not None:
            payload["userId"] = user_id

        response = await self._request(
            "POST", f"/comments/{quote(entity_id, safe='')}", json=payload
        )
        body = self._json(response)
        try:
            return CommentWire.model_validate(body).to_comment(entity_id)
        except ValueError as e:
            raise self._unexpected_body(response, "not a comment") from e

    async def delete_comment(self, entity_id: EntityId, comment_id: CommentId) -> int:
        """Delete a comment and its replies.

        Returns:
            Number of deleted comments, 0 if the comment was already gone

        Raises:
            CommentApiError: On network failure, error response other than 404
                or a body without a deleted count
        """
        response = await self._request(
            "DELETE",
            f"/comments/{quote(entity_id, safe='')}/{quote(comment_id, safe='')}",
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return 0

        body = self._json(response)
        if not isinstance(body, dict):
            raise self._unexpected_body(response, "not an object")
        try:
            return int(body.get("deletedCount", 0))
        except (TypeError, ValueError) as e:
            raise self._unexpected_body(response, "bad deletedCount") from e
