"""
Data Service Client — Async HTTP access to the program entity service.

Endpoints consumed:
  GET /api/programs
  GET /api/programs/{id}
  GET /api/{risks,milestones,dependencies,adopters}[?programId=...]

Payloads are validated into entity models on arrival. A payload that does
not fit the contract is reported as a DataServiceError, not passed on.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from pulse.config import settings
from pulse.models.entity_models import Adopter, Dependency, Milestone, Program, Risk
from pulse.models.report_models import Portfolio, ProgramSnapshot

logger = logging.getLogger("pulse.data_service")

ModelT = TypeVar("ModelT", bound=BaseModel)


class DataServiceError(Exception):
    """The data service was unreachable or returned an unusable response."""


class ProgramNotFoundError(DataServiceError):
    def __init__(self, program_id: str) -> None:
        super().__init__(f"Program '{program_id}' not found")
        self.program_id = program_id


async def _gather_all(*coros):
    # Let every request finish before the shared client closes, then surface the first failure.
    results = await asyncio.gather(*coros, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


class DataServiceClient:
    """Fetches entity snapshots from the data service."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.data_service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.data_service_timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        )

    async def _get_json(self, client: httpx.AsyncClient, path: str, params: dict | None = None):
        try:
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise DataServiceError(
                f"GET {path} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.TimeoutException as e:
            raise DataServiceError(f"GET {path} timed out") from e
        except httpx.HTTPError as e:
            raise DataServiceError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            raise DataServiceError(f"GET {path} returned invalid JSON") from e

    async def _get_collection(
        self,
        client: httpx.AsyncClient,
        path: str,
        model: type[ModelT],
        program_id: str | None = None,
    ) -> list[ModelT]:
        params = {"programId": program_id} if program_id else None
        payload = await self._get_json(client, path, params)
        if not isinstance(payload, list):
            raise DataServiceError(f"GET {path} returned {type(payload).__name__}, expected list")
        try:
            return [model.model_validate(item) for item in payload]
        except ValidationError as e:
            raise DataServiceError(f"GET {path} returned malformed {model.__name__}: {e}") from e

    async def get_program(self, program_id: str) -> Program:
        async with self._client() as client:
            return await self._fetch_program(client, program_id)

    async def _fetch_program(self, client: httpx.AsyncClient, program_id: str) -> Program:
        path = f"/api/programs/{program_id}"
        try:
            response = await client.get(path)
        except httpx.HTTPError as e:
            raise DataServiceError(f"GET {path} failed: {e}") from e
        if response.status_code == 404:
            raise ProgramNotFoundError(program_id)
        if response.is_error:
            raise DataServiceError(f"GET {path} returned HTTP {response.status_code}")
        try:
            return Program.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise DataServiceError(f"GET {path} returned malformed Program: {e}") from e

    async def fetch_snapshot(self, program_id: str) -> ProgramSnapshot:
        """Fetch a program, then its child collections concurrently."""
        async with self._client() as client:
            program = await self._fetch_program(client, program_id)
            risks, milestones, dependencies, adopters = await _gather_all(
                self._get_collection(client, "/api/risks", Risk, program_id),
                self._get_collection(client, "/api/milestones", Milestone, program_id),
                self._get_collection(client, "/api/dependencies", Dependency, program_id),
                self._get_collection(client, "/api/adopters", Adopter, program_id),
            )

        logger.info(
            f"Fetched snapshot for {program_id}: {len(risks)} risks, "
            f"{len(milestones)} milestones, {len(dependencies)} dependencies, "
            f"{len(adopters)} adopters"
        )
        return ProgramSnapshot(
            program=program,
            risks=risks,
            milestones=milestones,
            dependencies=dependencies,
            adopters=adopters,
        )

    async def fetch_portfolio(self) -> Portfolio:
        """Fetch every program and every entity collection, unfiltered."""
        async with self._client() as client:
            programs, risks, milestones, dependencies, adopters = await _gather_all(
                self._get_collection(client, "/api/programs", Program),
                self._get_collection(client, "/api/risks", Risk),
                self._get_collection(client, "/api/milestones", Milestone),
                self._get_collection(client, "/api/dependencies", Dependency),
                self._get_collection(client, "/api/adopters", Adopter),
            )

        logger.info(f"Fetched portfolio: {len(programs)} programs")
        return Portfolio(
            programs=programs,
            risks=risks,
            milestones=milestones,
            dependencies=dependencies,
            adopters=adopters,
        )
