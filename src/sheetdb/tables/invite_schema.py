"""
Definição do schema de Invites (convites de cadastro).

Um convite é uma "fonte registrável": quem o resgata ganha acesso ao
cadastro de um novo usuário. Shares herdam a mesma estrutura.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Mapping

from ..table import ColumnConstraints, Required, Unique
from ._values import format_datetime, optional_str, parse_bool, parse_datetime, utc_now
from .user_schema import User

INVITES_TABLE_NAME = "invites"
INVITES_TABLE_HEADER = [
    "id",
    "is_admin",
    "created",
    "created_by",
    "claimed_by",
    "claimed",
]
INVITES_CONSTRAINTS = ColumnConstraints.of(
    Required("id"),
    Required("created_by"),
    Unique("id"),
)


@dataclass
class RegisterableSource:
    """
    Base comum de convites e compartilhamentos.

    Attributes:
        id (str): Identificador único.
        created_by (User): Usuário que criou a fonte.
        is_admin (bool): Se o usuário cadastrado por esta fonte será administrador.
        created (datetime): Momento da criação (UTC).
        claimed_by (User | None): Usuário que resgatou, se já resgatada.
        claimed (datetime | None): Momento do resgate (UTC).
    """
    source_type: ClassVar[str] = ""

    id: str
    created_by: User
    is_admin: bool = False
    created: datetime = field(default_factory=utc_now)
    claimed_by: User | None = None
    claimed: datetime | None = None

    def claim(self, user: User) -> None:
        """
        Marca a fonte como resgatada por um usuário.

        Args:
            user (User): Usuário que está resgatando.
        """
        self.claimed_by = user
        self.claimed = utc_now()

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "is_admin": self.is_admin,
            "created": format_datetime(self.created),
            "created_by": self.created_by.id,
            "claimed_by": self.claimed_by.id if self.claimed_by else "",
            "claimed": format_datetime(self.claimed),
        }

    def claim_updates(self) -> dict[str, Any]:
        """Campos alterados quando a fonte é resgatada."""
        return {
            "claimed_by": self.claimed_by.id if self.claimed_by else "",
            "claimed": format_datetime(self.claimed),
        }

    @staticmethod
    def _common_fields(
        row: Mapping[str, Any],
        created_by_row: Mapping[str, Any],
        claimed_by_row: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        return {
            "id": str(row.get("id", "")),
            "created_by": User.from_row(created_by_row),
            "is_admin": parse_bool(row.get("is_admin", False)),
            "created": parse_datetime(row.get("created")) or utc_now(),
            "claimed_by": User.from_row(claimed_by_row) if claimed_by_row else None,
            "claimed": parse_datetime(optional_str(row.get("claimed"))),
        }


@dataclass
class Invite(RegisterableSource):
    """Convite de cadastro."""
    source_type: ClassVar[str] = "invite"

    @classmethod
    def from_rows(
        cls,
        invite_row: Mapping[str, Any],
        created_by_row: Mapping[str, Any],
        claimed_by_row: Mapping[str, Any] | None = None,
    ) -> "Invite":
        """
        Reconstrói o convite a partir da sua linha e das linhas dos usuários relacionados.
        """
        return cls(**cls._common_fields(invite_row, created_by_row, claimed_by_row))
