"""
Schemas das tabelas do site de cadastro por convite.

Cada módulo define nome da aba, cabeçalho, restrições e a entidade com
conversão para/de linha.
"""

from .credential_schema import (
    CREDENTIALS_CONSTRAINTS,
    CREDENTIALS_TABLE_HEADER,
    CREDENTIALS_TABLE_NAME,
    Authenticator,
    RegisteredAuthenticator,
)
from .invite_schema import (
    INVITES_CONSTRAINTS,
    INVITES_TABLE_HEADER,
    INVITES_TABLE_NAME,
    Invite,
    RegisterableSource,
)
from .share_schema import (
    SHARES_CONSTRAINTS,
    SHARES_TABLE_HEADER,
    SHARES_TABLE_NAME,
    MediaType,
    Share,
)
from .user_schema import USERS_CONSTRAINTS, USERS_TABLE_HEADER, USERS_TABLE_NAME, User

__all__ = [
    "CREDENTIALS_CONSTRAINTS",
    "CREDENTIALS_TABLE_HEADER",
    "CREDENTIALS_TABLE_NAME",
    "Authenticator",
    "RegisteredAuthenticator",
    "INVITES_CONSTRAINTS",
    "INVITES_TABLE_HEADER",
    "INVITES_TABLE_NAME",
    "Invite",
    "RegisterableSource",
    "SHARES_CONSTRAINTS",
    "SHARES_TABLE_HEADER",
    "SHARES_TABLE_NAME",
    "MediaType",
    "Share",
    "USERS_CONSTRAINTS",
    "USERS_TABLE_HEADER",
    "USERS_TABLE_NAME",
    "User",
]
