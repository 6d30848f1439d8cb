"""
Chess Client Package

Contains the REST API client for connecting to the chess server.
"""

from .configuration import ClientConfiguration
from .exceptions import ChessClientError, ProtocolError, TransportError
from .game_client import GameClient
from .logger import setup_logging, setup_logging_from_config
from .models import MoveRequest, MoveResult, Position

__all__ = [
    "ChessClientError",
    "ClientConfiguration",
    "GameClient",
    "MoveRequest",
    "MoveResult",
    "Position",
    "ProtocolError",
    "TransportError",
    "setup_logging",
    "setup_logging_from_config",
]
