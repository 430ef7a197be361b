"""
Exemplo básico de uso do sheetdb.

Este script cadastra um usuário, gera um convite e registra o resgate,
usando a planilha configurada no .env como banco de dados.
"""

import uuid

from dotenv import load_dotenv

from sheetdb import Config, GoogleSheetsDataProvider, TableStore, open_client
from sheetdb.tables import Invite, User

# Carrega variáveis de ambiente do arquivo .env
load_dotenv()


def main():
    """Função principal."""
    config = Config()

    provider = GoogleSheetsDataProvider(TableStore(open_client(config)))
    provider.initialize()

    print("=" * 60)
    print(f"📊 Planilha: {config.spreadsheet_id}")
    print(f"👥 Usuários cadastrados: {provider.get_user_count()}")
    print("=" * 60)

    # Cria o administrador na primeira execução
    admin = provider.find_user_by_name("admin")
    if admin is None:
        admin = provider.insert_user(
            User(id=str(uuid.uuid4()), username="admin", display_name="Administrador", is_admin=True)
        )
        print(f"✅ Administrador criado: {admin.id}")

    # Gera um convite e cadastra quem o resgatou
    invite = provider.insert_invite(Invite(id=str(uuid.uuid4()), created_by=admin))
    print(f"✉️  Convite criado: {invite.id}")

    guest = provider.insert_user(User(id=str(uuid.uuid4()), username=f"guest-{invite.id[:8]}"))
    invite.claim(guest)
    provider.update_invite(invite)

    stored = provider.find_invite_by_id(invite.id)
    print(f"🎉 Convite resgatado por {stored.claimed_by.username} em {stored.claimed:%Y-%m-%d %H:%M}")
    print(f"👥 Usuários cadastrados: {provider.get_user_count()}")


if __name__ == "__main__":
    main()
