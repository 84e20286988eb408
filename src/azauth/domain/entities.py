from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .value_objects import Color


@dataclass(frozen=True, slots=True)
class Role:
    """
    Website role of a player, as displayed on the Azuriom site.
    """
    name: str
    color: Optional[Color] = None


@dataclass(frozen=True, slots=True)
class PlayerProfile:
    """
    Player account returned by `authenticate` and `verify`.

    `access_token` is the token to keep for later `verify` / `logout` calls.
    """
    id: int
    username: str
    uuid: str
    access_token: str

    email: Optional[str] = None
    email_verified: bool = False
    money: float = 0.0
    banned: bool = False
    role: Optional[Role] = None
    created_at: Optional[datetime] = None

    @property
    def role_name(self) -> Optional[str]:
        return self.role.name if self.role else None


@dataclass(frozen=True, slots=True)
class AuthFailure:
    """
    Error body sent by the server along with a 422 status.
    """
    message: str
