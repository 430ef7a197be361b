"""
Fachada CRUD sobre as abas da planilha.

Leituras (count/find) não passam pela porta de escrita e podem observar uma
aba que está sendo alterada por outra requisição. Escritas (insert, update,
delete) executam leitura, validação, gravação e interpretação da resposta
inteiramente dentro da porta global.
"""
import logging
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any, TypeVar

from ..errors import NotFoundError
from ..gateway.client import SheetsClient, a1_range
from .constraints import ColumnConstraints, enforce_constraints
from .coordinator import WRITE_GATE, WriteGate
from .reader import open_table
from .row import Row, process_updated_data, row_to_values, values_to_row

logger = logging.getLogger(__name__)

KeyType = TypeVar("KeyType", bound=Hashable)

SearchPredicate = Callable[[Row], bool]
Constraints = ColumnConstraints | Mapping[str, Iterable[Any]] | None


class TableStore:
    """
    Operações de tabela sobre uma planilha.

    Nenhum estado de tabela é mantido entre chamadas: cada operação relê a aba.
    Números de linha retornados valem apenas até a próxima escrita; para
    localizar a linha novamente, use sempre um predicado.
    """

    def __init__(self, client: SheetsClient, gate: WriteGate | None = None):
        """
        Args:
            client (SheetsClient): Cliente da planilha.
            gate (WriteGate | None): Porta de escrita; por padrão a porta global do processo.
        """
        self.client = client
        self.gate = gate or WRITE_GATE

    # leituras

    def count_rows(self, table_name: str) -> int:
        """
        Conta as linhas de dados (sem o cabeçalho) pela coluna A.

        Returns:
            int: Quantidade de linhas; zero quando a aba não tem dados.
        """
        values = self.client.get(a1_range(table_name, "A:A"))
        return len(values) - 1 if values else 0

    def find_rows(self, table_name: str, predicate: SearchPredicate) -> list[Row]:
        """Retorna todas as linhas que satisfazem o predicado, na ordem da aba."""
        rows = [row for row in open_table(self.client, table_name).rows if predicate(row)]
        logger.debug("%d linhas encontradas na aba '%s'.", len(rows), table_name)
        return rows

    def find_row(self, table_name: str, predicate: SearchPredicate) -> Row | None:
        """Retorna a primeira linha que satisfaz o predicado, ou None."""
        for row in open_table(self.client, table_name).rows:
            if predicate(row):
                return row
        return None

    def find_key_rows(
        self,
        table_name: str,
        selector: Callable[[Row], KeyType],
        keys: Iterable[KeyType],
    ) -> dict[KeyType, Row]:
        """
        Busca, em uma única leitura, as linhas correspondentes a um conjunto de chaves.

        Chaves repetidas são consideradas uma vez; chaves sem linha ficam fora
        do resultado. Se várias linhas tiverem a mesma chave, vale a última.

        Args:
            table_name (str): Nome da aba.
            selector (Callable[[Row], KeyType]): Extrai a chave de uma linha.
            keys (Iterable[KeyType]): Chaves desejadas.

        Returns:
            dict[KeyType, Row]: Linhas indexadas pela chave.
        """
        distinct_keys = set(keys)
        rows_by_key: dict[KeyType, Row] = {}
        if not distinct_keys:
            return rows_by_key

        for row in open_table(self.client, table_name).rows:
            key = selector(row)
            if key in distinct_keys:
                rows_by_key[key] = row
        return rows_by_key

    # escritas

    def insert_row(
        self,
        table_name: str,
        new_row: Mapping[str, Any],
        constraints: Constraints = None,
    ) -> Row:
        """
        Adiciona uma linha ao final da aba.

        Args:
            table_name (str): Nome da aba.
            new_row (Mapping[str, Any]): Campos da nova linha.
            constraints: Restrições validadas antes do append.

        Returns:
            Row: Linha como gravada pelo backend, com seu número de linha.

        Raises:
            ValidationError: Se alguma restrição for violada (nada é gravado).
            NotFoundError: Se a aba não tiver cabeçalho.
        """
        with self.gate:
            table = open_table(self.client, table_name)
            if not table.columns:
                raise NotFoundError(f"A aba '{table_name}' não possui cabeçalho.")

            candidate = Row(new_row)
            enforce_constraints(table.rows, candidate, constraints)

            values = row_to_values(candidate, table.columns)
            updated_data = self.client.append(a1_range(table_name), values)
            updated = process_updated_data(updated_data, table_name, values)

            inserted = values_to_row(updated.updated_row_values, table.columns, updated.updated_row_number)

        logger.info("Linha %d inserida na aba '%s'.", inserted.row_number, table_name)
        return inserted

    def update_row(
        self,
        table_name: str,
        predicate: SearchPredicate,
        row_updates: Mapping[str, Any],
        constraints: Constraints = None,
    ) -> Row:
        """
        Atualiza a primeira linha que satisfaz o predicado.

        Os campos de ``row_updates`` são mesclados sobre a linha existente e a
        linha inteira é regravada na mesma posição.

        Args:
            table_name (str): Nome da aba.
            predicate (SearchPredicate): Localiza a linha a atualizar.
            row_updates (Mapping[str, Any]): Campos a alterar.
            constraints: Restrições validadas (sem comparar a linha consigo mesma).

        Returns:
            Row: Linha como gravada pelo backend.

        Raises:
            NotFoundError: Se nenhuma linha satisfizer o predicado.
            ValidationError: Se alguma restrição for violada (nada é gravado).
        """
        with self.gate:
            table = open_table(self.client, table_name)

            existing = next((row for row in table.rows if predicate(row)), None)
            if existing is None:
                logger.warning("Nenhuma linha encontrada para atualizar na aba '%s'.", table_name)
                raise NotFoundError(f"Linha não encontrada na aba '{table_name}'.")

            existing.update(row_updates)
            enforce_constraints(table.rows, existing, constraints)

            values = row_to_values(existing, table.columns)
            cell_range = a1_range(table_name, f"{existing.row_number}:{existing.row_number}")
            updated_data = self.client.update(cell_range, values)
            updated = process_updated_data(updated_data, table_name, values)

            updated_row = values_to_row(updated.updated_row_values, table.columns, updated.updated_row_number)

        logger.info("Linha %d atualizada na aba '%s'.", updated_row.row_number, table_name)
        return updated_row

    def delete_row(self, table_name: str, predicate: SearchPredicate) -> None:
        """
        Remove fisicamente a primeira linha que satisfaz o predicado.

        As linhas abaixo sobem uma posição, alterando seus números de linha.

        Raises:
            NotFoundError: Se nenhuma linha satisfizer o predicado ou a aba não existir nos metadados.
        """
        with self.gate:
            table = open_table(self.client, table_name)

            existing = next((row for row in table.rows if predicate(row)), None)
            if existing is None:
                logger.warning("Nenhuma linha encontrada para remover na aba '%s'.", table_name)
                raise NotFoundError(f"Linha não encontrada na aba '{table_name}'.")

            sheet = next(
                (sheet for sheet in self.client.get_metadata() if sheet.title == table_name),
                None,
            )
            if sheet is None:
                raise NotFoundError(f"Aba '{table_name}' não encontrada na planilha.")

            self.client.batch_update([
                {
                    "deleteDimension": {
                        "range": {
                            "sheetId": sheet.sheet_id,
                            "dimension": "ROWS",
                            "startIndex": existing.row_number - 1,
                            "endIndex": existing.row_number,
                        }
                    }
                }
            ])

        logger.info("Linha %d removida da aba '%s'.", existing.row_number, table_name)
