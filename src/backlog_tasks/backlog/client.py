"""Backlog REST API client wrapper."""

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

import httpx

from .models import Issue, Project, Status

logger = logging.getLogger(__name__)

PAGE_SIZE = 100  # Backlog caps `count` at 100
DEFAULT_TIMEOUT = 30.0

# Backlog error codes (https://developer.nulab.com/docs/backlog/error-response/)
ERROR_CODE_NO_RESOURCE = 6
ERROR_CODE_AUTHENTICATION = 11
ERROR_CODE_TOO_MANY_REQUESTS = 13

ProgressCallback = Callable[[int, int], None]


class BacklogClientError(Exception):
    """Base exception for Backlog client errors."""

    pass


class BacklogTransportError(BacklogClientError):
    """Connection, DNS or timeout failure."""

    pass


class BacklogAuthenticationError(BacklogClientError):
    """Authentication failed."""

    pass


class BacklogNotFoundError(BacklogClientError):
    """Resource not found."""

    pass


class BacklogRateLimitError(BacklogClientError):
    """Request throttled by Backlog."""

    pass


class BacklogDecodeError(BacklogClientError):
    """Response body could not be decoded."""

    pass


class BacklogAPIError(BacklogClientError):
    """Any other error reported by Backlog."""

    def __init__(self, message: str, status_code: int | None = None, code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


class BacklogClient:
    """Async Backlog API v2 client using httpx."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            base_url: API root (e.g., https://mycompany.backlog.com/api/v2)
            api_key: Backlog API key, sent with every request
            transport: Optional httpx transport, mainly for tests
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.transport = transport
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def for_space(cls, space: str, domain: str, api_key: str, **kwargs) -> "BacklogClient":
        """Create a client for ``https://<space>.<domain>/api/v2``."""
        return cls(f"https://{space}.{domain}/api/v2", api_key, **kwargs)

    async def __aenter__(self) -> "BacklogClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, *args) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self, endpoint: str, params: list[tuple[str, Any]] | None = None
    ) -> Any:
        """Make a GET request and decode the JSON body, classifying failures."""
        if not self._client:
            raise BacklogClientError("Client not initialized. Use async with context.")

        query = list(params or [])
        query.append(("apiKey", self.api_key))

        try:
            response = await self._client.get(endpoint, params=query)
        except httpx.DecodingError as e:
            raise BacklogDecodeError(f"Undecodable response from {endpoint}: {e}") from e
        except httpx.TransportError as e:
            raise BacklogTransportError(
                f"Could not reach {self.base_url}: {type(e).__name__}: {e}"
            ) from e
        except httpx.RequestError as e:
            # TooManyRedirects and other non-transport request failures
            raise BacklogTransportError(
                f"Request to {self.base_url} failed: {type(e).__name__}: {e}"
            ) from e
        except httpx.InvalidURL as e:
            raise BacklogClientError(f"Invalid URL {self.base_url}{endpoint}: {e}") from e

        if response.status_code != 200:
            raise self._classify_error(response)

        try:
            return response.json()
        except ValueError as e:
            raise BacklogDecodeError(f"Invalid JSON from {endpoint}: {e}") from e

    @staticmethod
    def _classify_error(response: httpx.Response) -> BacklogClientError:
        """Map a non-200 response onto the error taxonomy."""
        message = None
        code = None
        try:
            errors = response.json().get("errors") or []
        except (ValueError, AttributeError):
            errors = []
        if errors and isinstance(errors[0], dict):
            message = errors[0].get("message")
            code = errors[0].get("code")

        status = response.status_code
        if status == 401 or code == ERROR_CODE_AUTHENTICATION:
            return BacklogAuthenticationError(message or "Authentication failed (401)")
        if status == 404 or code == ERROR_CODE_NO_RESOURCE:
            return BacklogNotFoundError(message or f"Not found: {response.request.url.path}")
        if status == 429 or code == ERROR_CODE_TOO_MANY_REQUESTS:
            return BacklogRateLimitError(message or "Rate limit exceeded (429)")
        if message:
            return BacklogAPIError(message, status_code=status, code=code)
        return BacklogAPIError(
            f"API request failed with status {status}: {response.text}",
            status_code=status,
        )

    async def get_project(self, project_id_or_key: str) -> Project:
        """Fetch a project by numeric ID or project key.

        Args:
            project_id_or_key: Project ID (e.g., "12345") or key (e.g., "MYPROJ")

        Returns:
            Project object
        """
        data = await self._request(f"/projects/{quote(str(project_id_or_key), safe='')}")
        try:
            return Project.from_api_response(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise BacklogDecodeError(f"Unexpected project payload: {e!r}") from e

    async def get_statuses(self, project_id_or_key: str) -> list[Status]:
        """Fetch the status definitions of a project.

        Args:
            project_id_or_key: Project ID or key

        Returns:
            List of Status objects in display order
        """
        data = await self._request(
            f"/projects/{quote(str(project_id_or_key), safe='')}/statuses"
        )
        try:
            return [Status.from_api_response(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise BacklogDecodeError(f"Unexpected statuses payload: {e!r}") from e

    async def get_issues(
        self,
        project_id: int,
        status_ids: list[int] | None = None,
        assignee_id: int | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> list[Issue]:
        """Fetch every matching issue, following offset pagination.

        Pages are requested one at a time, sorted by creation time ascending.
        A page shorter than PAGE_SIZE ends the loop. Any failure aborts the
        whole fetch; issues collected so far are discarded.

        Args:
            project_id: Numeric project ID
            status_ids: Restrict to these statuses (empty means unfiltered)
            assignee_id: Optional assignee filter
            on_progress: Called with (fetched, -1) after each page and once
                with (total, total) when done

        Returns:
            List of Issue objects in creation order
        """
        issues: list[Issue] = []
        offset = 0

        while True:
            params: list[tuple[str, Any]] = [
                ("projectId[]", project_id),
                ("count", PAGE_SIZE),
                ("offset", offset),
                ("sort", "created"),
                ("order", "asc"),
            ]
            params.extend(("statusId[]", status_id) for status_id in status_ids or [])
            if assignee_id is not None:
                params.append(("assigneeId[]", assignee_id))

            logger.debug("Fetching issues page offset=%d project=%s", offset, project_id)
            data = await self._request("/issues", params=params)
            try:
                page = [Issue.from_api_response(item) for item in data]
            except (KeyError, TypeError, AttributeError, ValueError) as e:
                raise BacklogDecodeError(f"Unexpected issues payload: {e!r}") from e

            issues.extend(page)

            if on_progress:
                on_progress(len(issues), -1)  # total unknown until the last page

            if len(page) < PAGE_SIZE:
                break

            offset += PAGE_SIZE

        if on_progress:
            on_progress(len(issues), len(issues))

        return issues
