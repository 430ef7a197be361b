"""
Cliente de backend sobre a API de valores do Google Sheets.

Expõe as cinco chamadas usadas pela camada de tabelas: leitura de intervalo,
append de linha, atualização de intervalo, batch update estrutural e metadados
da planilha. Leituras passam pelo retry; escritas são enviadas uma única vez.
"""
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from gspread import Spreadsheet
from gspread.exceptions import APIError
from google.auth.exceptions import GoogleAuthError

from ..errors import BackendUnavailableError, MalformedResponseError
from ._retry import retry

logger = logging.getLogger(__name__)

ReturnType = TypeVar("ReturnType")

# Falhas de rede/autenticação (requests.RequestException deriva de OSError)
BACKEND_EXCEPTIONS = (APIError, GoogleAuthError, OSError)

READ_PARAMS = {
    "valueRenderOption": "UNFORMATTED_VALUE",
    "dateTimeRenderOption": "SERIAL_NUMBER",
}

WRITE_PARAMS = {
    "valueInputOption": "RAW",
    "includeValuesInResponse": True,
    "responseValueRenderOption": "UNFORMATTED_VALUE",
    "responseDateTimeRenderOption": "SERIAL_NUMBER",
}

_PLAIN_SHEET_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
# Nomes que a API confundiria com referências de célula (A1, AB12, R1C1)
_CELL_REFERENCE = re.compile(r"^(?:[A-Za-z]{1,3}[0-9]+|[Rr][0-9]*[Cc][0-9]*)$")


def quote_sheet_name(sheet_name: str) -> str:
    """
    Formata o nome de uma aba para uso em notação A1.

    Nomes simples são usados como estão; os demais, inclusive os que parecem
    referências de célula, ficam entre aspas simples com aspas internas duplicadas.
    """
    if _PLAIN_SHEET_NAME.match(sheet_name) and not _CELL_REFERENCE.match(sheet_name):
        return sheet_name
    return "'" + sheet_name.replace("'", "''") + "'"


def a1_range(sheet_name: str, cells: str | None = None) -> str:
    """
    Monta um intervalo A1 qualificado pela aba (ex: ``users!7:7``).

    Args:
        sheet_name (str): Nome da aba.
        cells (str | None): Parte de células do intervalo; None referencia a aba inteira.
    """
    quoted = quote_sheet_name(sheet_name)
    return f"{quoted}!{cells}" if cells else quoted


@dataclass(frozen=True)
class SheetInfo:
    """
    Metadados estruturais de uma aba.

    Attributes:
        title (str): Nome da aba.
        sheet_id (int): ID numérico usado em requisições estruturais.
        row_count (int): Quantidade de linhas da grade.
        column_count (int): Quantidade de colunas da grade.
    """
    title: str
    sheet_id: int
    row_count: int
    column_count: int


class SheetsClient:
    """
    Acesso de baixo nível a uma planilha do Google Sheets.

    Todas as chamadas são vinculadas a uma única planilha; os intervalos
    recebidos já devem estar qualificados pelo nome da aba.
    """

    def __init__(self, spreadsheet: Spreadsheet):
        self.spreadsheet = spreadsheet

    def _call(self, description: str, function: Callable[[], ReturnType]) -> ReturnType:
        """
        Executa uma chamada ao backend convertendo falhas de rede/API em BackendUnavailableError.
        """
        try:
            return function()
        except BACKEND_EXCEPTIONS as e:
            logger.error("Falha no backend ao executar %s: %s", description, e)
            raise BackendUnavailableError(f"Falha no backend ao executar {description}: {e}") from e

    def get(self, cell_range: str) -> list[list[Any]]:
        """
        Lê os valores de um intervalo.

        Args:
            cell_range (str): Intervalo A1 (ex: ``users`` ou ``users!A:A``).

        Returns:
            list[list[Any]]: Linhas lidas; lista vazia quando o intervalo não tem dados.
        """
        logger.debug("Lendo intervalo '%s'.", cell_range)
        response = self._call(
            f"leitura de '{cell_range}'",
            lambda: retry(lambda: self.spreadsheet.values_get(cell_range, params=READ_PARAMS)),
        )
        return response.get("values", [])

    def append(self, cell_range: str, values: list[Any]) -> dict[str, Any]:
        """
        Adiciona uma linha ao final da tabela contida no intervalo.

        Args:
            cell_range (str): Intervalo da tabela (normalmente o nome da aba).
            values (list[Any]): Valores da linha, na ordem das colunas.

        Returns:
            dict[str, Any]: Bloco ``updatedData`` da resposta (``range`` e ``values``).
        """
        logger.debug("Adicionando linha em '%s': %s", cell_range, values)
        response = self._call(
            f"append em '{cell_range}'",
            lambda: self.spreadsheet.values_append(
                cell_range,
                params={**WRITE_PARAMS, "insertDataOption": "INSERT_ROWS"},
                body={"values": [values]},
            ),
        )
        updated_data = (response.get("updates") or {}).get("updatedData")
        if not updated_data:
            raise MalformedResponseError(
                f"Resposta de append em '{cell_range}' não contém updatedData."
            )
        return updated_data

    def update(self, cell_range: str, values: list[Any]) -> dict[str, Any]:
        """
        Substitui os valores de um intervalo de uma linha.

        Args:
            cell_range (str): Intervalo a sobrescrever (ex: ``users!7:7``).
            values (list[Any]): Novos valores da linha.

        Returns:
            dict[str, Any]: Bloco ``updatedData`` da resposta (``range`` e ``values``).
        """
        logger.debug("Atualizando intervalo '%s': %s", cell_range, values)
        response = self._call(
            f"update em '{cell_range}'",
            lambda: self.spreadsheet.values_update(
                cell_range,
                params=WRITE_PARAMS,
                body={"values": [values]},
            ),
        )
        updated_data = response.get("updatedData")
        if not updated_data:
            raise MalformedResponseError(
                f"Resposta de update em '{cell_range}' não contém updatedData."
            )
        return updated_data

    def batch_update(self, requests: list[dict[str, Any]]) -> None:
        """
        Envia requisições estruturais (ex: deleteDimension) em um único batch.

        Args:
            requests (list[dict[str, Any]]): Requisições no formato da API batchUpdate.
        """
        logger.debug("Enviando batch update com %d requisições.", len(requests))
        self._call(
            "batch update",
            lambda: self.spreadsheet.batch_update({"requests": requests}),
        )

    def get_metadata(self) -> list[SheetInfo]:
        """
        Obtém os metadados estruturais de todas as abas da planilha.

        Returns:
            list[SheetInfo]: Uma entrada por aba, na ordem da planilha.
        """
        logger.debug("Obtendo metadados da planilha.")
        metadata = self._call(
            "leitura de metadados",
            lambda: retry(lambda: self.spreadsheet.fetch_sheet_metadata()),
        )

        sheets: list[SheetInfo] = []
        for sheet in metadata.get("sheets", []):
            properties = sheet.get("properties", {})
            grid = properties.get("gridProperties", {})
            sheets.append(
                SheetInfo(
                    title=properties.get("title", ""),
                    sheet_id=properties.get("sheetId", 0),
                    row_count=grid.get("rowCount", 0),
                    column_count=grid.get("columnCount", 0),
                )
            )
        return sheets
