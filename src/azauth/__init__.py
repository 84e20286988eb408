"""
azauth

Client for the AzAuth API of Azuriom websites: authenticate players with
their credentials, verify access tokens and log players out.
"""

__version__ = "0.1.0"

from .domain.entities import AuthFailure, PlayerProfile, Role
from .domain.constants import Endpoint
from .domain.exceptions import (
    AzAuthError,
    AuthenticationError,
    ResponseFormatError,
)
from .domain.value_objects import Color
from .domain.ports import ValueCodec

from .adapters.json.codecs import ColorCodec, InstantCodec, CodecRegistry, default_codecs
from .adapters.json.shapes import Shape, shape_of
from .adapters.json.mapper import JsonMapper

from .client import AzAuthClient, PLAYER_PROFILE
from .settings import AzAuthSettings
from .env import settings_from_env, client_from_env

__all__ = [
    "__version__",
    # domain core
    "PlayerProfile",
    "Role",
    "AuthFailure",
    "Color",
    "Endpoint",
    "ValueCodec",
    # exceptions
    "AzAuthError",
    "AuthenticationError",
    "ResponseFormatError",
    # json mapping
    "ColorCodec",
    "InstantCodec",
    "CodecRegistry",
    "default_codecs",
    "Shape",
    "shape_of",
    "JsonMapper",
    # client
    "AzAuthClient",
    "PLAYER_PROFILE",
    "AzAuthSettings",
    "settings_from_env",
    "client_from_env",
]
