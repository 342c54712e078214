"""
HTTP client for the tracker API.

Shared by both front ends.  Responses are parsed into the same schema
objects the server uses, so every session received satisfies
``trainingLoad == duration * rpe``.
"""

from __future__ import annotations

import datetime
from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from app.schemas.dataset import Dataset, ImportResult
from app.schemas.player import Player
from app.schemas.session import Session


class TrackerAPIError(Exception):
    """A request failed.

    ``status_code`` is ``None`` when the server could not be reached or
    answered with something that is not the documented shape.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TrackerClient:
    """Thin wrapper around an :class:`httpx.Client`.

    Args:
        base_url: Server root, e.g. ``http://localhost:3000``.
        api_prefix: Path prefix of the API routes.
        timeout: Request timeout in seconds.
        http: Pre-built client (e.g. FastAPI's ``TestClient``); when given,
            ``base_url`` and ``timeout`` are ignored.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        api_prefix: str = "/api",
        timeout: float = 10.0,
        http: Optional[httpx.Client] = None,
    ):
        self.api_prefix = api_prefix.rstrip("/")
        self._owns_http = http is None
        self.http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> TrackerClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        url = f"{self.api_prefix}{path}"
        try:
            response = self.http.request(method, url, json=json)
        except httpx.RequestError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TrackerAPIError(f"Server unreachable: {e}") from e

        if response.is_error:
            message = self._error_message(response)
            logger.warning(f"{method} {url} -> {response.status_code}: {message}")
            raise TrackerAPIError(message, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"{method} {url} returned invalid JSON")
            raise TrackerAPIError("Invalid response from server") from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return response.reason_phrase

    @staticmethod
    def _parse(model: type, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            raise TrackerAPIError(f"Invalid {model.__name__} in server response") from e

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def get_data(self) -> Dataset:
        return self._parse(Dataset, self._request("GET", "/data"))

    def get_raw_data(self) -> dict[str, Any]:
        """The ``GET /data`` document exactly as served (used for export)."""
        return self._request("GET", "/data")

    def replace_data(self, dataset: dict[str, Any]) -> None:
        self._request("PUT", "/data", json=dataset)

    def clear_data(self) -> None:
        self._request("DELETE", "/data")

    def add_player(self, name: str) -> Player:
        return self._parse(Player, self._request("POST", "/players", json={"name": name}))

    def delete_player(self, player_id: str) -> None:
        self._request("DELETE", f"/players/{player_id}")

    def add_session(
        self, player_id: str, date: datetime.date, duration: int, rpe: int, notes: str = "",
    ) -> Session:
        payload = {"date": date.isoformat(), "duration": duration, "rpe": rpe, "notes": notes}
        return self._parse(Session, self._request("POST", f"/players/{player_id}/sessions", json=payload))

    def import_players(self, document: dict[str, Any]) -> int:
        """Post an exported document to ``/import``; returns ``addedPlayers``."""
        result = self._parse(ImportResult, self._request("POST", "/import", json=document))
        return result.added_players
