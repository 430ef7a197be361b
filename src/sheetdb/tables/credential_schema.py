"""
Definição do schema de Credentials (autenticadores WebAuthn registrados).

Cada linha pertence a um usuário (coluna user_id); a ligação é resolvida
pelo data provider, que combina a linha da credencial com a do usuário.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from ..table import ColumnConstraints, Required, Unique
from ._values import (
    format_datetime,
    join_list,
    parse_bool,
    parse_datetime,
    parse_int,
    split_list,
    utc_now,
)
from .user_schema import User

CREDENTIALS_TABLE_NAME = "credentials"
CREDENTIALS_TABLE_HEADER = [
    "id",
    "created",
    "public_key",
    "counter",
    "aaguid",
    "device_type",
    "is_backed_up",
    "transports",
    "user_id",
]
CREDENTIALS_CONSTRAINTS = ColumnConstraints.of(
    Required("id"),
    Required("user_id"),
    Unique("id"),
)


@dataclass
class Authenticator:
    """
    Autenticador registrado por uma cerimônia de attestation.

    Attributes:
        credential_id (str): ID da credencial (base64url).
        credential_public_key (str): Chave pública codificada (base64url).
        counter (int): Contador de assinaturas.
        aaguid (str): AAGUID do modelo de autenticador.
        credential_device_type (str): "singleDevice" ou "multiDevice".
        credential_backed_up (bool): Se a credencial está sincronizada/backup.
        transports (list[str]): Transportes suportados (usb, nfc, internal...).
        created (datetime): Momento do registro (UTC).
    """
    credential_id: str
    credential_public_key: str
    counter: int = 0
    aaguid: str = ""
    credential_device_type: str = "singleDevice"
    credential_backed_up: bool = False
    transports: list[str] = field(default_factory=list)
    created: datetime = field(default_factory=utc_now)

    def to_row(self, user_id: str) -> dict[str, Any]:
        """
        Converte para linha da tabela credentials.

        Args:
            user_id (str): ID do usuário dono da credencial.
        """
        return {
            "id": self.credential_id,
            "created": format_datetime(self.created),
            "public_key": self.credential_public_key,
            "counter": self.counter,
            "aaguid": self.aaguid,
            "device_type": self.credential_device_type,
            "is_backed_up": self.credential_backed_up,
            "transports": join_list(self.transports),
            "user_id": user_id,
        }


@dataclass
class RegisteredAuthenticator(Authenticator):
    """Autenticador junto com o usuário ao qual pertence."""
    user: User | None = None

    @classmethod
    def from_rows(
        cls, credential_row: Mapping[str, Any], user_row: Mapping[str, Any]
    ) -> "RegisteredAuthenticator":
        """
        Reconstrói a credencial a partir da sua linha e da linha do usuário.

        Args:
            credential_row: Linha da tabela credentials.
            user_row: Linha da tabela users correspondente a user_id.
        """
        return cls(
            credential_id=str(credential_row.get("id", "")),
            credential_public_key=str(credential_row.get("public_key", "")),
            counter=parse_int(credential_row.get("counter")),
            aaguid=str(credential_row.get("aaguid", "")),
            credential_device_type=str(credential_row.get("device_type", "singleDevice")),
            credential_backed_up=parse_bool(credential_row.get("is_backed_up", False)),
            transports=split_list(credential_row.get("transports")),
            created=parse_datetime(credential_row.get("created")) or utc_now(),
            user=User.from_row(user_row),
        )
