"""
Exemplo: Demonstração de error handling.

Mostra como as falhas do sheetdb chegam ao chamador: violações de
restrição, linhas inexistentes e indisponibilidade do backend têm
exceções próprias, todas derivadas de SheetDBError.
"""

from dotenv import load_dotenv

from sheetdb import (
    BackendUnavailableError,
    ColumnConstraints,
    Config,
    NotFoundError,
    SheetDBError,
    TableStore,
    Unique,
    ValidationError,
    open_client,
)

# Carrega variáveis de ambiente do .env
load_dotenv()

UNIQUE_EMAIL = ColumnConstraints.of(Unique("email"))


def main():
    """
    Função principal que demonstra error handling.

    A aba "contacts" precisa existir com o cabeçalho: id, email.
    """
    try:
        store = TableStore(open_client(Config()))
    except BackendUnavailableError as e:
        # Autenticação ou rede indisponíveis; vale tentar novamente mais tarde
        print(f"🔌 Backend indisponível: {e}")
        return

    store.insert_row("contacts", {"id": "1", "email": "a@example.com"}, UNIQUE_EMAIL)

    try:
        store.insert_row("contacts", {"id": "2", "email": "a@example.com"}, UNIQUE_EMAIL)
    except ValidationError as e:
        # Nada foi gravado: a verificação acontece antes do append
        print(f"❌ Coluna '{e.column}' rejeitou o valor {e.value!r}: {e}")

    try:
        store.update_row("contacts", lambda r: r["id"] == "404", {"email": "b@example.com"})
    except NotFoundError as e:
        print(f"🔍 {e}")

    try:
        store.delete_row("contacts", lambda r: r["id"] == "1")
        print("🗑️  Linha removida")
    except SheetDBError as e:
        # Qualquer outra falha do armazenamento
        print(f"⚠️  {type(e).__name__}: {e}")


if __name__ == "__main__":
    main()
