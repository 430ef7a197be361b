"""
Codec de linhas: conversão entre Row (campos nomeados) e a lista plana de
valores enviada/recebida do Google Sheets.

A posição de um valor na lista determina sua coluna; nenhum nome de coluna
trafega junto com as células. Por isso a ordem de ``columns`` precisa ser
exatamente a do cabeçalho lido da aba.
"""
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import MalformedResponseError

logger = logging.getLogger(__name__)


class Row(dict):
    """
    Registro de uma tabela: mapeamento coluna -> valor com o número da linha oculto.

    ``row_number`` é a posição absoluta (1-based) da linha na aba e é derivado
    da leitura, não um identificador: inserções e remoções acima da linha o
    alteram. Linhas ainda não gravadas têm ``row_number`` igual a None.
    """

    def __init__(self, *args: Any, row_number: int | None = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.row_number = row_number

    def __repr__(self) -> str:
        return f"Row({dict.__repr__(self)}, row_number={self.row_number})"


@dataclass(frozen=True)
class UpdatedRow:
    """
    Linha como persistida pelo backend após um append/update.

    Attributes:
        updated_row_values (list[Any]): Valores gravados (podem diferir dos enviados).
        updated_row_number (int): Número da linha (1-based) onde os valores foram gravados.
    """
    updated_row_values: list[Any]
    updated_row_number: int


def row_to_values(row: Mapping[str, Any], columns: list[str]) -> list[Any]:
    """
    Projeta uma linha estruturada em uma lista plana alinhada às colunas.

    Colunas ausentes (ou com None) viram células vazias, o que também limpa
    qualquer conteúdo anterior em um update.

    Args:
        row (Mapping[str, Any]): Campos da linha.
        columns (list[str]): Colunas da tabela, na ordem do cabeçalho.

    Returns:
        list[Any]: Valores na ordem das colunas.
    """
    unknown = [key for key in row if key not in columns]
    if unknown:
        logger.warning("Campos sem coluna correspondente serão ignorados: %s", unknown)

    return ["" if row.get(column) is None else row[column] for column in columns]


def values_to_row(values: list[Any], columns: list[str], row_number: int | None) -> Row:
    """
    Converte uma lista plana de valores em uma Row.

    Colunas além dos valores recebidos ficam ausentes (não viram ""), o que
    distingue "não definido" de "vazio". Valores além das colunas conhecidas
    são descartados.

    Args:
        values (list[Any]): Valores da linha, na ordem das colunas.
        columns (list[str]): Colunas da tabela, na ordem do cabeçalho.
        row_number (int | None): Número da linha (1-based) na aba.

    Returns:
        Row: Linha estruturada com o número da linha anexado.
    """
    return Row(zip(columns, values), row_number=row_number)


# sheet!A5:C5 | 'My Sheet'!A5 | sheet!5:5 | A5:C5
_RANGE_PATTERN = re.compile(
    r"^(?:(?P<sheet>'(?:[^']|'')+'|[^'!:]+)!)?"
    r"(?P<start_column>[A-Za-z]*)(?P<start_row>\d*)"
    r"(?::(?P<end_column>[A-Za-z]*)(?P<end_row>\d*))?$"
)


def _unquote_sheet_name(sheet: str) -> str:
    if sheet.startswith("'") and sheet.endswith("'"):
        return sheet[1:-1].replace("''", "'")
    return sheet


def parse_row_number(updated_range: str, sheet_name: str) -> int:
    """
    Extrai o número da linha de uma referência A1 de uma única linha.

    Aceita ``Aba!A5:C5``, ``'Aba com espaço'!A5:C5``, ``Aba!A5``, ``Aba!5:5``
    e as mesmas formas sem a aba. Qualquer outra forma é tratada como resposta
    malformada: referência de outra aba, várias linhas, apenas colunas ou
    vários intervalos.

    Args:
        updated_range (str): Referência retornada pelo backend.
        sheet_name (str): Aba onde a escrita foi feita.

    Returns:
        int: Número da linha (1-based).
    """
    match = _RANGE_PATTERN.match(updated_range or "")
    if not match:
        raise MalformedResponseError(f"Intervalo retornado não reconhecido: '{updated_range}'")

    sheet = match.group("sheet")
    if sheet is not None and _unquote_sheet_name(sheet) != sheet_name:
        raise MalformedResponseError(
            f"Intervalo '{updated_range}' não pertence à aba '{sheet_name}'"
        )

    start_row = match.group("start_row")
    if not start_row:
        raise MalformedResponseError(f"Intervalo '{updated_range}' não identifica uma linha")

    if match.group("end_column") is not None or match.group("end_row") is not None:
        end_row = match.group("end_row")
        if not end_row:
            raise MalformedResponseError(f"Intervalo '{updated_range}' não identifica uma linha")
        if int(end_row) != int(start_row):
            raise MalformedResponseError(
                f"Intervalo '{updated_range}' abrange mais de uma linha"
            )

    row_number = int(start_row)
    if row_number < 1:
        raise MalformedResponseError(f"Intervalo '{updated_range}' possui linha inválida")
    return row_number


def process_updated_data(
    updated_data: Mapping[str, Any],
    sheet_name: str,
    sent_values: list[Any],
) -> UpdatedRow:
    """
    Interpreta o bloco ``updatedData`` retornado por um append/update.

    Args:
        updated_data (Mapping[str, Any]): Bloco com ``range`` e, opcionalmente, ``values``.
        sheet_name (str): Aba onde a escrita foi feita.
        sent_values (list[Any]): Valores enviados, usados quando o backend não os ecoa.

    Returns:
        UpdatedRow: Valores persistidos e número da linha gravada.
    """
    row_number = parse_row_number(updated_data.get("range", ""), sheet_name)

    returned = updated_data.get("values")
    if returned is None:
        values = list(sent_values)
    elif len(returned) == 1:
        values = list(returned[0])
    elif len(returned) == 0:
        values = []
    else:
        raise MalformedResponseError(
            f"Resposta de escrita em '{sheet_name}' contém {len(returned)} linhas"
        )

    logger.debug("Linha %d confirmada na aba '%s': %s", row_number, sheet_name, values)
    return UpdatedRow(updated_row_values=values, updated_row_number=row_number)
