"""
REST API client for the chess server.
Fetches the current board position and submits moves for a UI layer.
"""

import logging
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .configuration import DEFAULT_BASE_URL, ClientConfiguration
from .exceptions import ProtocolError, TransportError
from .models import (
    HelloResponse,
    MoveRequest,
    MoveResponse,
    MoveResult,
    Position,
    PositionResponse,
)


logger = logging.getLogger(__name__)

POSITION_PATH = "/position"
MOVE_PATH = "/move"
HELLO_PATH = "/hello"

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


class GameClient:
    """Client for the chess server REST API.

    The server origin and timeout are fixed at construction. Each call is
    independent: nothing is cached and no retry is attempted.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the game client.

        Args:
            base_url: Origin of the chess server (scheme, host and port)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: ClientConfiguration) -> "GameClient":
        return cls(base_url=config.base_url, timeout=config.timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def __repr__(self) -> str:
        return f"GameClient(base_url={self._base_url!r}, timeout={self._timeout})"

    async def fetch_position(self) -> Position:
        """Fetch the current board position.

        Returns:
            The server's position_fen, unmodified

        Raises:
            TransportError: If the request could not be completed
            ProtocolError: If the response is not {"position_fen": str}
        """
        data = await self._send("GET", POSITION_PATH)

        if data.get("position_fen") is None and isinstance(data.get("error"), str):
            logger.error(
                f"Server could not provide a position: {data['error']}",
                extra={"event_type": "protocol_error", "endpoint": POSITION_PATH},
            )
            raise ProtocolError(
                f"Server reported an error instead of a position: {data['error']}",
                server_error=data["error"],
            )

        position = self._parse(PositionResponse, data, POSITION_PATH).position_fen
        logger.info(
            "Fetched position",
            extra={"event_type": "position_fetched", "position": position},
        )
        return position

    async def submit_move(self, source: str, destination: str) -> MoveResult:
        """Submit a move to the server.

        A move the server refuses comes back with ``error`` set on the
        result; it is not raised.

        Args:
            source: Square the piece moves from, e.g. "e2"
            destination: Square the piece moves to, e.g. "e4"

        Returns:
            MoveResult with the resulting position and the server's error, if any

        Raises:
            TransportError: If the request could not be completed
            ProtocolError: If the response carries neither a position nor an error
        """
        request = MoveRequest(source=source, destination=destination)
        data = await self._send("POST", MOVE_PATH, request.to_payload())
        result = MoveResult.from_response(self._parse(MoveResponse, data, MOVE_PATH))

        if result.rejected:
            logger.info(
                f"Move {source} -> {destination} rejected: {result.error}",
                extra={
                    "event_type": "move_rejected",
                    "src": source,
                    "dst": destination,
                    "error": result.error,
                },
            )
        else:
            logger.info(
                f"Move {source} -> {destination} accepted",
                extra={
                    "event_type": "move_submitted",
                    "src": source,
                    "dst": destination,
                    "position": result.position,
                },
            )
        return result

    async def ping(self) -> str:
        """Check that the server is reachable.

        Returns:
            The greeting the server answers with
        """
        data = await self._send("GET", HELLO_PATH)
        return self._parse(HelloResponse, data, HELLO_PATH).message

    async def _send(
        self, method: str, path: str, payload: Optional[dict] = None
    ) -> dict:
        """Perform one HTTP request and return the decoded JSON object."""
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.request(method, url, json=payload)
        except httpx.RequestError as e:
            logger.error(
                f"{method} {url} failed: {e}",
                extra={"event_type": "transport_error", "endpoint": path},
            )
            raise TransportError(f"{method} {url} failed: {e}", cause=e) from e

        logger.debug(
            f"Raw response from {method} {path}: {response.status_code} {response.text}",
            extra={"endpoint": path, "status_code": response.status_code},
        )

        if not response.is_success:
            logger.error(
                f"{method} {url} returned HTTP {response.status_code}",
                extra={
                    "event_type": "protocol_error",
                    "endpoint": path,
                    "status_code": response.status_code,
                },
            )
            raise ProtocolError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"{method} {url} returned a body that is not JSON: {e}",
                extra={"event_type": "protocol_error", "endpoint": path},
            )
            raise ProtocolError(
                f"Invalid JSON in response from {path}: {e}",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise ProtocolError(
                f"Expected a JSON object from {path}, got {type(data).__name__}",
                status_code=response.status_code,
            )

        return data

    @staticmethod
    def _parse(
        model: Type[ResponseModel], data: dict, path: str
    ) -> ResponseModel:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(
                f"Unexpected response shape from {path}: {data}",
                extra={"event_type": "protocol_error", "endpoint": path},
            )
            raise ProtocolError(f"Invalid response from {path}: {e}") from e
