"""
Definição do schema de Users (usuários cadastrados).
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from ..table import ColumnConstraints, Required, Unique
from ._values import format_datetime, parse_bool, parse_datetime, utc_now

USERS_TABLE_NAME = "users"
USERS_TABLE_HEADER = [
    "id",
    "created",
    "username",
    "display_name",
    "is_admin",
]
USERS_CONSTRAINTS = ColumnConstraints.of(
    Required("id"),
    Required("username"),
    Unique("id"),
    Unique("username"),
)


@dataclass
class User:
    """
    Usuário do site, identificado por um ID opaco e um nome de usuário único.

    Attributes:
        id (str): Identificador único do usuário.
        username (str): Nome de login (único).
        display_name (str): Nome exibido no perfil.
        is_admin (bool): Se o usuário pode criar convites de administrador.
        created (datetime): Momento do cadastro (UTC).
    """
    id: str
    username: str
    display_name: str = ""
    is_admin: bool = False
    created: datetime = field(default_factory=utc_now)

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "created": format_datetime(self.created),
            "username": self.username,
            "display_name": self.display_name,
            "is_admin": self.is_admin,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        return cls(
            id=str(row.get("id", "")),
            username=str(row.get("username", "")),
            display_name=str(row.get("display_name", "")),
            is_admin=parse_bool(row.get("is_admin", False)),
            created=parse_datetime(row.get("created")) or utc_now(),
        )
