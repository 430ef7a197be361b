import logging
from dataclasses import dataclass, field

from ..errors import DataIntegrityError
from ..gateway.client import SheetsClient, a1_range
from .row import Row, values_to_row

logger = logging.getLogger(__name__)

HEADER_ROW_NUMBER = 1
FIRST_DATA_ROW_NUMBER = 2


@dataclass
class Table:
    """
    Retrato de uma aba em memória, reconstruído a cada operação.

    Attributes:
        name (str): Nome da aba.
        columns (list[str]): Colunas na ordem do cabeçalho.
        rows (list[Row]): Linhas de dados, na ordem da aba.
    """
    name: str
    columns: list[str] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)


def open_table(client: SheetsClient, table_name: str) -> Table:
    """
    Carrega a aba inteira: cabeçalho e todas as linhas de dados.

    Não há paginação; o custo cresce com o tamanho da aba.

    Args:
        client (SheetsClient): Cliente da planilha.
        table_name (str): Nome da aba.

    Returns:
        Table: Colunas e linhas da aba. Uma aba sem dados resulta em listas vazias.

    Raises:
        DataIntegrityError: Se o cabeçalho repetir um nome de coluna.
    """
    values = client.get(a1_range(table_name))

    if not values:
        logger.debug("Aba '%s' está vazia.", table_name)
        return Table(name=table_name)

    columns = [str(column) for column in values[0]]
    duplicated = sorted({column for column in columns if columns.count(column) > 1})
    if duplicated:
        logger.error("Cabeçalho da aba '%s' repete colunas: %s", table_name, duplicated)
        raise DataIntegrityError(
            f"O cabeçalho da aba '{table_name}' repete as colunas: {', '.join(duplicated)}"
        )

    rows = [
        values_to_row(row_values, columns, row_number)
        for row_number, row_values in enumerate(values[1:], start=FIRST_DATA_ROW_NUMBER)
    ]

    logger.debug("Aba '%s' carregada: %d colunas, %d linhas.", table_name, len(columns), len(rows))
    return Table(name=table_name, columns=columns, rows=rows)
