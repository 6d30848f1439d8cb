# ABOUTME: Pydantic models for the chess server API requests and responses
# ABOUTME: Wire bodies for /position, /move and /hello plus the MoveResult handed to callers

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


# A FEN string. Opaque to the client and passed through unchanged.
Position = str


# Request models
class MoveRequest(BaseModel):
    """A move to attempt, identified by its source and destination squares."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(alias="src")
    destination: str = Field(alias="dst")

    def to_payload(self) -> dict:
        """Return the JSON body expected by POST /move."""
        return self.model_dump(by_alias=True)


# Response models
class PositionResponse(BaseModel):
    position_fen: Position


class MoveResponse(BaseModel):
    position_fen: Optional[Position] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def require_position_or_error(self) -> "MoveResponse":
        """A rejection may omit the position, a success may not."""
        if self.position_fen is None and not self.error:
            raise ValueError("move response carries neither position_fen nor error")
        return self


class HelloResponse(BaseModel):
    message: str


class MoveResult(BaseModel):
    """Outcome of a submitted move.

    ``error`` is set when the server rejected the move; this is a normal
    result for the caller to inspect, not a failure.
    """

    model_config = ConfigDict(frozen=True)

    position: Optional[Position]
    error: Optional[str] = None

    @property
    def rejected(self) -> bool:
        return bool(self.error)

    @classmethod
    def from_response(cls, response: MoveResponse) -> "MoveResult":
        return cls(position=response.position_fen, error=response.error)
