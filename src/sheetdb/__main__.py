"""Ponto de entrada para execução do módulo como script."""

import logging
import sys

from gspread import SpreadsheetNotFound

from .config import Config
from .errors import SheetDBError
from .gateway import open_client
from .provider import TABLES, GoogleSheetsDataProvider
from .table import TableStore

logger = logging.getLogger("sheetdb")


def main() -> int:
    """Verifica a planilha configurada e mostra a contagem de linhas de cada aba."""
    try:
        config = Config()
    except ValueError as e:
        print(f"Erro de configuração: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        store = TableStore(open_client(config))
        provider = GoogleSheetsDataProvider(store)
        provider.initialize()

        for table_name, _ in TABLES:
            logger.info("Aba '%s': %d linhas", table_name, store.count_rows(table_name))

    except (SheetDBError, SpreadsheetNotFound, ValueError) as e:
        logger.error("Erro fatal: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
