"""
Exemplo avançado: várias threads escrevendo na mesma aba.

Todas as escritas do processo passam pela mesma porta de escrita, em ordem
de chegada, então duas threads tentando gravar o mesmo e-mail nunca
resultam em duas linhas. Leituras não esperam pela porta.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from dotenv import load_dotenv

from sheetdb import ColumnConstraints, Config, Required, TableStore, Unique, ValidationError, open_client
from sheetdb.gateway import configure_rate_limiting

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(threadName)s - %(levelname)s - %(message)s'
)

# Unique composto: o mesmo e-mail pode aparecer em equipes diferentes
CONSTRAINTS = ColumnConstraints.from_mapping({
    "required": ["id", "email"],
    "uniques": ["id", ["email", "team"]],
})


def register(store: TableStore, index: int) -> str:
    row = {"id": str(index), "email": "shared@example.com", "team": "red" if index % 2 else "blue"}
    try:
        inserted = store.insert_row("members", row, CONSTRAINTS)
        return f"✅ {row['id']} gravado na linha {inserted.row_number}"
    except ValidationError as e:
        return f"❌ {row['id']} rejeitado: {e}"


def main():
    """A aba "members" precisa existir com o cabeçalho: id, email, team."""
    # Espaça as leituras para respeitar a cota da API
    configure_rate_limiting(0.2)

    store = TableStore(open_client(Config()))

    with ThreadPoolExecutor(max_workers=6) as executor:
        for result in executor.map(lambda i: register(store, i), range(6)):
            print(result)

    # Exatamente um membro por equipe
    print(f"📊 Membros gravados: {store.count_rows('members')}")
    for member in store.find_rows("members", lambda r: r.get("email") == "shared@example.com"):
        print(f"   linha {member.row_number}: {dict(member)}")


if __name__ == "__main__":
    main()
