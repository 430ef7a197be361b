"""
Data provider do site de cadastro por convite sobre o Google Sheets.

Mapeia usuários, credenciais, convites e compartilhamentos para quatro abas,
usando exclusivamente a fachada CRUD do TableStore.
"""
import logging

from .errors import DataIntegrityError, NotFoundError
from .gateway import get_worksheet
from .table import Row, TableStore
from .tables import (
    CREDENTIALS_CONSTRAINTS,
    CREDENTIALS_TABLE_HEADER,
    CREDENTIALS_TABLE_NAME,
    INVITES_CONSTRAINTS,
    INVITES_TABLE_HEADER,
    INVITES_TABLE_NAME,
    SHARES_CONSTRAINTS,
    SHARES_TABLE_HEADER,
    SHARES_TABLE_NAME,
    USERS_CONSTRAINTS,
    USERS_TABLE_HEADER,
    USERS_TABLE_NAME,
    Authenticator,
    Invite,
    RegisteredAuthenticator,
    Share,
    User,
)

logger = logging.getLogger(__name__)

TABLES = [
    (USERS_TABLE_NAME, USERS_TABLE_HEADER),
    (CREDENTIALS_TABLE_NAME, CREDENTIALS_TABLE_HEADER),
    (INVITES_TABLE_NAME, INVITES_TABLE_HEADER),
    (SHARES_TABLE_NAME, SHARES_TABLE_HEADER),
]


class GoogleSheetsDataProvider:
    """
    Persistência das entidades do site em abas do Google Sheets.
    """

    def __init__(self, store: TableStore):
        """
        Args:
            store (TableStore): Fachada de tabelas sobre a planilha do site.
        """
        self.store = store
        self._initialized = False

    def initialize(self) -> None:
        """
        Garante que as quatro abas existam com os cabeçalhos esperados.

        Executa apenas uma vez por instância.
        """
        if self._initialized:
            return

        spreadsheet = self.store.client.spreadsheet
        for table_name, header in TABLES:
            get_worksheet(spreadsheet, table_name, header, create=True)

        self._initialized = True
        logger.info("Data provider do Google Sheets inicializado")

    def _users_by_id(self, user_ids: list[str]) -> dict[str, Row]:
        return self.store.find_key_rows(
            USERS_TABLE_NAME,
            lambda r: r.get("id"),
            [user_id for user_id in user_ids if user_id],
        )

    # users

    def get_user_count(self) -> int:
        return self.store.count_rows(USERS_TABLE_NAME)

    def find_user_by_id(self, user_id: str) -> User | None:
        row = self.store.find_row(USERS_TABLE_NAME, lambda r: r.get("id") == user_id)
        return User.from_row(row) if row else None

    def find_user_by_name(self, username: str) -> User | None:
        row = self.store.find_row(USERS_TABLE_NAME, lambda r: r.get("username") == username)
        return User.from_row(row) if row else None

    def insert_user(self, user: User) -> User:
        row = self.store.insert_row(USERS_TABLE_NAME, user.to_row(), USERS_CONSTRAINTS)
        return User.from_row(row)

    def update_user(self, user: User) -> None:
        """Atualiza os campos editáveis do perfil (apenas display_name)."""
        self.store.update_row(
            USERS_TABLE_NAME,
            lambda r: r.get("id") == user.id,
            {"display_name": user.display_name},
            USERS_CONSTRAINTS,
        )

    # credentials

    def find_credential_by_id(self, credential_id: str) -> RegisteredAuthenticator | None:
        """
        Busca uma credencial pelo ID, junto com o usuário dono.

        Raises:
            DataIntegrityError: Se o usuário dono não existir mais.
        """
        credential_row = self.store.find_row(
            CREDENTIALS_TABLE_NAME, lambda r: r.get("id") == credential_id
        )
        if not credential_row:
            return None

        user_id = credential_row.get("user_id")
        user_row = self.store.find_row(USERS_TABLE_NAME, lambda r: r.get("id") == user_id)
        if not user_row:
            raise DataIntegrityError(
                f"Usuário '{user_id}' não existe mais para a credencial '{credential_id}'"
            )
        return RegisteredAuthenticator.from_rows(credential_row, user_row)

    def find_user_credential(
        self, user_id: str, credential_id: str
    ) -> RegisteredAuthenticator | None:
        user_row = self.store.find_row(USERS_TABLE_NAME, lambda r: r.get("id") == user_id)
        credential_row = self.store.find_row(
            CREDENTIALS_TABLE_NAME,
            lambda r: r.get("user_id") == user_id and r.get("id") == credential_id,
        )
        if user_row and credential_row:
            return RegisteredAuthenticator.from_rows(credential_row, user_row)
        return None

    def find_credentials_by_user(self, user_id: str) -> list[RegisteredAuthenticator]:
        user_row = self.store.find_row(USERS_TABLE_NAME, lambda r: r.get("id") == user_id)
        if not user_row:
            return []

        credential_rows = self.store.find_rows(
            CREDENTIALS_TABLE_NAME, lambda r: r.get("user_id") == user_id
        )
        return [RegisteredAuthenticator.from_rows(row, user_row) for row in credential_rows]

    def insert_credential(self, user_id: str, credential: Authenticator) -> None:
        """
        Registra uma credencial para um usuário existente.

        Raises:
            NotFoundError: Se o usuário não existir.
        """
        user_row = self.store.find_row(USERS_TABLE_NAME, lambda r: r.get("id") == user_id)
        if not user_row:
            raise NotFoundError(f"Usuário '{user_id}' não existe")

        self.store.insert_row(
            CREDENTIALS_TABLE_NAME, credential.to_row(user_id), CREDENTIALS_CONSTRAINTS
        )

    def delete_credential(self, credential_id: str) -> None:
        self.store.delete_row(CREDENTIALS_TABLE_NAME, lambda r: r.get("id") == credential_id)

    # invites

    def find_invite_by_id(self, invite_id: str) -> Invite | None:
        invite_row = self.store.find_row(INVITES_TABLE_NAME, lambda r: r.get("id") == invite_id)
        if not invite_row:
            return None

        users = self._users_by_id([invite_row.get("created_by"), invite_row.get("claimed_by")])
        return Invite.from_rows(
            invite_row,
            self._require_user(users, invite_row.get("created_by"), invite_id),
            users.get(invite_row.get("claimed_by")),
        )

    def insert_invite(self, invite: Invite) -> Invite:
        row = self.store.insert_row(INVITES_TABLE_NAME, invite.to_row(), INVITES_CONSTRAINTS)
        return Invite.from_rows(
            row,
            invite.created_by.to_row(),
            invite.claimed_by.to_row() if invite.claimed_by else None,
        )

    def update_invite(self, invite: Invite) -> None:
        self.store.update_row(
            INVITES_TABLE_NAME,
            lambda r: r.get("id") == invite.id,
            invite.claim_updates(),
            INVITES_CONSTRAINTS,
        )

    # shares

    def find_share_by_id(self, share_id: str) -> Share | None:
        share_row = self.store.find_row(SHARES_TABLE_NAME, lambda r: r.get("id") == share_id)
        if not share_row:
            return None

        users = self._users_by_id([share_row.get("created_by"), share_row.get("claimed_by")])
        return Share.from_rows(
            share_row,
            self._require_user(users, share_row.get("created_by"), share_id),
            users.get(share_row.get("claimed_by")),
        )

    def find_shares_by_claimed_user_id(self, user_id: str) -> list[Share]:
        share_rows = self.store.find_rows(
            SHARES_TABLE_NAME, lambda r: r.get("claimed_by") == user_id
        )
        return self._shares_from_rows(share_rows)

    def find_shares_by_created_user_id(self, user_id: str) -> list[Share]:
        share_rows = self.store.find_rows(
            SHARES_TABLE_NAME, lambda r: r.get("created_by") == user_id
        )
        return self._shares_from_rows(share_rows)

    def insert_share(self, share: Share) -> Share:
        row = self.store.insert_row(SHARES_TABLE_NAME, share.to_row(), SHARES_CONSTRAINTS)
        return Share.from_rows(
            row,
            share.created_by.to_row(),
            share.claimed_by.to_row() if share.claimed_by else None,
        )

    def update_share(self, share: Share) -> None:
        self.store.update_row(
            SHARES_TABLE_NAME,
            lambda r: r.get("id") == share.id,
            share.claim_updates(),
            SHARES_CONSTRAINTS,
        )

    def _shares_from_rows(self, share_rows: list[Row]) -> list[Share]:
        if not share_rows:
            return []

        related = []
        for row in share_rows:
            related.extend([row.get("created_by"), row.get("claimed_by")])
        users = self._users_by_id(related)

        return [
            Share.from_rows(
                row,
                self._require_user(users, row.get("created_by"), row.get("id")),
                users.get(row.get("claimed_by")),
            )
            for row in share_rows
        ]

    @staticmethod
    def _require_user(users: dict[str, Row], user_id: str, record_id: str) -> Row:
        user_row = users.get(user_id)
        if user_row is None:
            raise DataIntegrityError(
                f"Usuário '{user_id}' não existe mais para o registro '{record_id}'"
            )
        return user_row
