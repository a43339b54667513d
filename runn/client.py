"""
Async client for the Runn REST API.

Wraps the list/get endpoints the MCP tools need.  Every request carries the
bearer token and the Accept-Version header; every paginated list is walked
with core.pagination.paginate and every page request is retried on 429/5xx
with core.pagination.with_retry.

Usage:
    async with RunnClient(RunnConfig.from_env()) as client:
        people = await client.list_people()
"""

import logging
from typing import Any, Optional

import httpx

from core.errors import RunnAPIError
from core.models import (
    Actual,
    Assignment,
    Client,
    Leave,
    Person,
    PersonSkill,
    Project,
    Role,
    Skill,
    Team,
)
from core.pagination import paginate, with_retry
from runn.config import RunnConfig

logger = logging.getLogger(__name__)


def _parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Retry-After in seconds; the HTTP-date form is ignored."""
    if not value:
        return None
    try:
        return max(float(value), 0.0)
    except ValueError:
        return None


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


class RunnClient:
    """
    Async client for the Runn API.

    Args:
        config: Connection settings (key, URL, page size, limits).
        transport: Optional httpx transport, used by tests to stub responses.
    """

    def __init__(
        self,
        config: RunnConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "RunnClient":
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get HTTP client, creating one if needed."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.config.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self.config.api_key}",
                    "Accept-Version": self.config.api_version,
                    "Accept": "application/json",
                },
            )
        return self._client

    # -------------------------------------------------------------------------
    # Request plumbing
    # -------------------------------------------------------------------------
    async def _send(self, path: str, params: Optional[dict] = None) -> Any:
        """Issue one GET, turning HTTP error statuses into RunnAPIError."""
        client = self._get_client()
        query = {k: v for k, v in (params or {}).items() if v is not None}
        response = await client.get(path, params=query)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RunnAPIError(
                status_code=e.response.status_code,
                message=e.response.text[:200] or e.response.reason_phrase,
                retry_after=_parse_retry_after(e.response.headers.get("Retry-After")),
            ) from e
        return response.json()

    async def _get(self, path: str, params: Optional[dict] = None) -> Any:
        """GET with retry on 429/5xx."""
        logger.debug(f"GET {path} {params or {}}")
        return await with_retry(
            lambda: self._send(path, params),
            max_retries=self.config.max_retries,
        )

    async def _list_all(self, path: str, params: Optional[dict] = None) -> list[dict]:
        """Walk every page of a cursor-paginated list endpoint."""
        base_params = {**(params or {}), "limit": self.config.page_size}

        async def fetch_page(cursor: Optional[str]) -> dict:
            return await self._get(path, {**base_params, "cursor": cursor})

        return await paginate(fetch_page, max_pages=self.config.max_pages)

    async def _list_one_page(self, path: str, params: Optional[dict] = None) -> list[dict]:
        """Single page of a small lookup collection."""
        data = await self._get(path, {**(params or {}), "limit": self.config.page_size})
        return (data or {}).get("values") or []

    # -------------------------------------------------------------------------
    # People
    # -------------------------------------------------------------------------
    async def list_people(self, include_placeholders: bool = False) -> list[Person]:
        rows = await self._list_all(
            "/people", {"includePlaceholders": _bool_param(include_placeholders)}
        )
        return [Person.from_api(r) for r in rows]

    async def get_person(self, person_id: int) -> Person:
        data = await self._get(f"/people/{person_id}")
        return Person.from_api(data)

    async def list_person_skills(self, person_id: int) -> list[PersonSkill]:
        rows = await self._list_one_page(f"/people/{person_id}/skills")
        return [PersonSkill.from_api(r) for r in rows]

    # -------------------------------------------------------------------------
    # Projects & clients
    # -------------------------------------------------------------------------
    async def list_projects(
        self, include_archived: bool = False, name: Optional[str] = None
    ) -> list[Project]:
        rows = await self._list_all(
            "/projects", {"includeArchived": _bool_param(include_archived), "name": name or None}
        )
        return [Project.from_api(r) for r in rows]

    async def list_clients(self) -> list[Client]:
        rows = await self._list_all("/clients", {"sortBy": "createdAt"})
        return [Client.from_api(r) for r in rows]

    # -------------------------------------------------------------------------
    # Scheduling & time
    # -------------------------------------------------------------------------
    async def list_assignments(self, person_id: Optional[int] = None) -> list[Assignment]:
        rows = await self._list_all("/assignments", {"personId": person_id})
        return [Assignment.from_api(r) for r in rows]

    async def list_actuals(
        self, min_date: Optional[str] = None, max_date: Optional[str] = None
    ) -> list[Actual]:
        rows = await self._list_all("/actuals", {"minDate": min_date, "maxDate": max_date})
        return [Actual.from_api(r) for r in rows]

    async def list_leave(self) -> list[Leave]:
        rows = await self._list_all("/time-offs/leave", {"sortBy": "createdAt"})
        return [Leave.from_api(r) for r in rows]

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------
    async def list_teams(self) -> list[Team]:
        return [Team.from_api(r) for r in await self._list_one_page("/teams")]

    async def list_roles(self) -> list[Role]:
        return [Role.from_api(r) for r in await self._list_one_page("/roles")]

    async def list_skills(self) -> list[Skill]:
        return [Skill.from_api(r) for r in await self._list_one_page("/skills", {"sortBy": "id"})]
