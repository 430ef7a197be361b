"""
Testes do data provider sobre a planilha em memória.
"""
from unittest.mock import Mock, patch

import pytest

from fakes import FakeSpreadsheet
from sheetdb.errors import BackendUnavailableError, DataIntegrityError, NotFoundError, ValidationError
from sheetdb.gateway.client import SheetsClient
from sheetdb.provider import TABLES, GoogleSheetsDataProvider
from sheetdb.table import TableStore, WriteGate
from sheetdb.tables import Authenticator, Invite, MediaType, Share, User


@pytest.fixture
def site_spreadsheet():
    return FakeSpreadsheet({name: [list(header)] for name, header in TABLES})


@pytest.fixture
def provider(site_spreadsheet):
    return GoogleSheetsDataProvider(TableStore(SheetsClient(site_spreadsheet), gate=WriteGate()))


@pytest.fixture
def alice(provider):
    return provider.insert_user(User(id="u1", username="alice", display_name="Alice", is_admin=True))


@pytest.fixture
def bob(provider):
    return provider.insert_user(User(id="u2", username="bob"))


class TestInitialize:
    """Testes para initialize."""

    @patch("sheetdb.provider.get_worksheet")
    def test_ensures_all_tables_once(self, mock_get_worksheet, provider, site_spreadsheet):
        """Cria/valida as quatro abas apenas na primeira chamada."""
        provider.initialize()
        provider.initialize()

        assert mock_get_worksheet.call_count == 4
        for (name, header), call in zip(TABLES, mock_get_worksheet.call_args_list):
            assert call.args == (site_spreadsheet, name, header)
            assert call.kwargs == {"create": True}

    @patch("sheetdb.gateway._retry.time.sleep")
    def test_network_failure_is_backend_unavailable(self, mock_sleep):
        """Falhas de rede ao preparar as abas seguem a hierarquia de erros."""
        spreadsheet = Mock()
        spreadsheet.worksheet.side_effect = ConnectionError("down")
        provider = GoogleSheetsDataProvider(TableStore(SheetsClient(spreadsheet), gate=WriteGate()))

        with pytest.raises(BackendUnavailableError):
            provider.initialize()

        assert provider._initialized is False


class TestUsers:
    """Testes para usuários."""

    def test_insert_and_find(self, provider, alice):
        assert provider.get_user_count() == 1
        assert provider.find_user_by_id("u1") == alice
        assert provider.find_user_by_name("alice") == alice
        assert alice.is_admin is True

    def test_missing_user(self, provider):
        assert provider.find_user_by_id("u404") is None
        assert provider.find_user_by_name("nobody") is None
        assert provider.get_user_count() == 0

    def test_duplicate_username_fails(self, provider, alice):
        with pytest.raises(ValidationError) as error:
            provider.insert_user(User(id="u9", username="alice"))

        assert error.value.column == "username"
        assert provider.get_user_count() == 1

    def test_update_user_changes_display_name_only(self, provider, alice):
        """Apenas display_name é editável."""
        changed = User(id="u1", username="renamed", display_name="Alice B.", is_admin=False)

        provider.update_user(changed)
        stored = provider.find_user_by_id("u1")

        assert stored.display_name == "Alice B."
        assert stored.username == "alice"
        assert stored.is_admin is True

    def test_update_missing_user_fails(self, provider):
        with pytest.raises(NotFoundError):
            provider.update_user(User(id="u404", username="ghost"))


class TestCredentials:
    """Testes para credenciais."""

    def test_insert_and_find(self, provider, alice):
        provider.insert_credential("u1", Authenticator("cred-1", "pk", counter=2, transports=["usb"]))

        found = provider.find_credential_by_id("cred-1")

        assert found.credential_public_key == "pk"
        assert found.counter == 2
        assert found.transports == ["usb"]
        assert found.user == alice

    def test_find_user_credential(self, provider, alice, bob):
        provider.insert_credential("u1", Authenticator("cred-1", "pk"))

        assert provider.find_user_credential("u1", "cred-1").credential_id == "cred-1"
        assert provider.find_user_credential("u2", "cred-1") is None

    def test_find_credentials_by_user(self, provider, alice, bob):
        provider.insert_credential("u1", Authenticator("cred-1", "pk1"))
        provider.insert_credential("u2", Authenticator("cred-2", "pk2"))
        provider.insert_credential("u1", Authenticator("cred-3", "pk3"))

        credentials = provider.find_credentials_by_user("u1")

        assert [c.credential_id for c in credentials] == ["cred-1", "cred-3"]
        assert provider.find_credentials_by_user("u404") == []

    def test_insert_for_missing_user_fails(self, provider):
        with pytest.raises(NotFoundError):
            provider.insert_credential("u404", Authenticator("cred-1", "pk"))

    def test_duplicate_credential_fails(self, provider, alice):
        provider.insert_credential("u1", Authenticator("cred-1", "pk"))

        with pytest.raises(ValidationError):
            provider.insert_credential("u1", Authenticator("cred-1", "other"))

    def test_delete_credential(self, provider, alice):
        provider.insert_credential("u1", Authenticator("cred-1", "pk1"))
        provider.insert_credential("u1", Authenticator("cred-2", "pk2"))

        provider.delete_credential("cred-1")

        assert provider.find_credential_by_id("cred-1") is None
        assert provider.find_credential_by_id("cred-2").credential_id == "cred-2"

    def test_orphan_credential_is_integrity_error(self, provider, site_spreadsheet, alice):
        """Credencial cujo usuário sumiu é inconsistência da planilha."""
        provider.insert_credential("u1", Authenticator("cred-1", "pk"))
        del site_spreadsheet.sheets["users"][1]

        with pytest.raises(DataIntegrityError):
            provider.find_credential_by_id("cred-1")
        assert provider.find_credential_by_id("cred-404") is None


class TestInvites:
    """Testes para convites."""

    def test_insert_find_and_claim(self, provider, alice, bob):
        invite = provider.insert_invite(Invite(id="inv-1", created_by=alice))

        assert invite.created_by == alice
        assert invite.claimed_by is None

        invite.claim(bob)
        provider.update_invite(invite)
        found = provider.find_invite_by_id("inv-1")

        assert found.claimed_by == bob
        assert found.claimed == invite.claimed
        assert found.created_by == alice

    def test_missing_invite(self, provider):
        assert provider.find_invite_by_id("inv-404") is None

    def test_invite_with_missing_creator_is_integrity_error(self, provider, site_spreadsheet, alice):
        provider.insert_invite(Invite(id="inv-1", created_by=alice))
        del site_spreadsheet.sheets["users"][1]

        with pytest.raises(DataIntegrityError):
            provider.find_invite_by_id("inv-1")


class TestShares:
    """Testes para compartilhamentos."""

    def _share(self, share_id, creator, **kwargs):
        return Share(
            id=share_id,
            created_by=creator,
            backing_url=f"https://example.com/{share_id}",
            file_title=share_id,
            available_media_types=[MediaType.from_name("application/pdf")],
            **kwargs,
        )

    def test_insert_and_find(self, provider, alice):
        provider.insert_share(self._share("share-1", alice, to_username="bob", expire_duration="PT1H"))

        found = provider.find_share_by_id("share-1")

        assert found.created_by == alice
        assert found.to_username == "bob"
        assert found.expire_duration == "PT1H"
        assert [m.extension for m in found.available_media_types] == ["pdf"]
        assert provider.find_share_by_id("share-404") is None

    def test_claim_and_find_by_user(self, provider, alice, bob):
        first = provider.insert_share(self._share("share-1", alice))
        provider.insert_share(self._share("share-2", alice))
        provider.insert_share(self._share("share-3", bob))

        first.claim(bob)
        provider.update_share(first)

        claimed = provider.find_shares_by_claimed_user_id("u2")
        created = provider.find_shares_by_created_user_id("u1")

        assert [s.id for s in claimed] == ["share-1"]
        assert claimed[0].claimed_by == bob
        assert [s.id for s in created] == ["share-1", "share-2"]
        assert provider.find_shares_by_created_user_id("u404") == []
