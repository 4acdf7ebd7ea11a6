"""
Remote Note Store.

The write and read operations the home screen needs from the notes API,
with transport failures translated into NetworkError / NotFoundError.

Endpoints (relative to the configured notes path, default /notes):
    GET    /notes        -> list of notes
    POST   /notes        -> created note
    PUT    /notes/{id}   -> updated note
    DELETE /notes/{id}   -> no content

Response bodies may be the bare JSON value or wrapped in the standard
envelope {"success": ..., "data": ..., "error": ...}.
"""

from typing import Any, Protocol

import aiobreaker
import httpx
from pydantic import TypeAdapter, ValidationError

from noteboard.client.api import APIClient
from noteboard.core.config import get_app_config
from noteboard.core.exceptions import NetworkError, NotFoundError
from noteboard.core.logging import get_logger
from noteboard.core.resilience import create_circuit_breaker
from noteboard.schemas.note import Note, NoteCreate, NoteId, NoteUpdate

logger = get_logger(__name__)

_note_list = TypeAdapter(list[Note])


class NoteStore(Protocol):
    """Remote persistence for notes. Each call is atomic and authoritative."""

    async def fetch_all(self) -> list[Note]: ...

    async def update(self, note_id: NoteId, data: NoteUpdate) -> Note | None: ...

    async def delete(self, note_id: NoteId) -> None: ...

    async def create(self, data: NoteCreate) -> Note | None: ...


class _ServerError(Exception):
    """5xx response; raised inside the breaker so it counts as a failure."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        super().__init__(f"HTTP {response.status_code}")


class HttpNoteStore:
    """
    NoteStore backed by the notes REST API.

    Every request goes through a circuit breaker. Nothing is retried:
    the caller reports the failure and the user decides what to do next.
    """

    def __init__(
        self,
        client: APIClient | None = None,
        notes_path: str | None = None,
        breaker: aiobreaker.CircuitBreaker | None = None,
    ) -> None:
        if notes_path is None or breaker is None:
            app = get_app_config().application
            notes_path = notes_path or app.api.notes_path
            breaker = breaker or create_circuit_breaker(
                "notes_api",
                fail_max=app.circuit_breaker.fail_max,
                timeout_duration=app.circuit_breaker.timeout_duration,
            )
        self.client = client or APIClient()
        self.notes_path = "/" + notes_path.strip("/")
        self._breaker = breaker

    async def close(self) -> None:
        await self.client.close()

    def _note_path(self, note_id: NoteId) -> str:
        return f"{self.notes_path}/{note_id}"

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self.client.request(method, path, **kwargs)
        if response.status_code >= 500:
            raise _ServerError(response)
        return response

    async def _call(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and map every failure onto the store's error taxonomy."""
        try:
            response = await self._breaker.call_async(self._send, method, path, **kwargs)
        except aiobreaker.CircuitBreakerError as e:
            raise NetworkError("Notes API unavailable (circuit open)") from e
        except httpx.TimeoutException as e:
            raise NetworkError(f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e
        except _ServerError as e:
            raise NetworkError(f"{method} {path} returned {e.response.status_code}") from e

        if response.status_code == 404:
            raise NotFoundError(f"{method} {path}: note not found")
        if response.status_code >= 400:
            raise NetworkError(f"{method} {path} returned {response.status_code}")
        return response

    @staticmethod
    def _payload(response: httpx.Response) -> Any:
        """Decode the JSON body, unwrapping the response envelope when present."""
        if response.status_code == 204 or not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise NetworkError("Notes API returned a malformed body") from e
        if isinstance(body, dict) and "data" in body and "success" in body:
            if not body["success"]:
                error = body.get("error")
                if isinstance(error, dict):
                    message = str(error.get("message") or "Notes API reported a failure")
                else:
                    message = str(error) if error else "Notes API reported a failure"
                raise NetworkError(message)
            return body["data"]
        return body

    async def fetch_all(self) -> list[Note]:
        response = await self._call("GET", self.notes_path)
        payload = self._payload(response)
        try:
            notes = _note_list.validate_python(payload if payload is not None else [])
        except ValidationError as e:
            raise NetworkError("Notes API returned invalid notes") from e
        logger.debug("Fetched notes", count=len(notes))
        return notes

    async def update(self, note_id: NoteId, data: NoteUpdate) -> Note | None:
        response = await self._call("PUT", self._note_path(note_id), json=data.model_dump())
        return self._note_or_none(response)

    async def delete(self, note_id: NoteId) -> None:
        await self._call("DELETE", self._note_path(note_id))

    async def create(self, data: NoteCreate) -> Note | None:
        response = await self._call("POST", self.notes_path, json=data.model_dump())
        return self._note_or_none(response)

    def _note_or_none(self, response: httpx.Response) -> Note | None:
        """Parse a note from the body; APIs that answer with an ack return None."""
        payload = self._payload(response)
        if not isinstance(payload, dict) or "id" not in payload:
            return None
        try:
            return Note.model_validate(payload)
        except ValidationError as e:
            raise NetworkError("Notes API returned an invalid note") from e
