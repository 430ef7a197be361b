import logging

from gspread import Spreadsheet, Worksheet, WorksheetNotFound

from ..errors import BackendUnavailableError
from ._retry import retry
from .client import BACKEND_EXCEPTIONS

logger = logging.getLogger(__name__)


def get_header_mapping(worksheet: Worksheet) -> dict[str, int]:
    """
    Obtém um mapeamento do cabeçalho de uma aba do Google Sheets, associando nomes de colunas aos seus índices.

    Args:
        worksheet (Worksheet): A aba do Google Sheets da qual o cabeçalho será obtido.

    Returns:
        dict[str, int]: Dicionário mapeando nomes de colunas para seus índices (0-based).
    """
    header = retry(lambda: worksheet.row_values(1))

    mapping: dict[str, int] = {}

    for index, column_name in enumerate(header):
        if column_name in mapping:
            raise ValueError(f"Nome de coluna duplicado encontrado no cabeçalho: '{column_name}'")
        mapping[column_name] = index

    logger.debug("Mapeamento de cabeçalho da aba '%s': %s", worksheet.title, mapping)
    return mapping


def _ensure_header(worksheet: Worksheet, expected_header: list[str]) -> None:
    """
    Garante que o cabeçalho da aba contenha todas as colunas esperadas.

    Uma aba sem cabeçalho recebe o cabeçalho esperado. Colunas extras são
    permitidas (a ordem real é sempre lida do cabeçalho), mas colunas
    faltantes tornam a aba inutilizável.

    Args:
        worksheet (Worksheet): A aba a ser verificada.
        expected_header (list[str]): Colunas que a aba precisa conter.
    """
    mapping = get_header_mapping(worksheet)

    if not mapping:
        logger.info("Aba '%s' sem cabeçalho. Escrevendo cabeçalho esperado.", worksheet.title)
        retry(lambda: worksheet.update(range_name="A1", values=[expected_header]))
        return

    missing = [column for column in expected_header if column not in mapping]
    if missing:
        logger.error("Cabeçalho da aba '%s' não possui as colunas: %s", worksheet.title, missing)
        raise ValueError(
            f"O cabeçalho da aba '{worksheet.title}' não possui as colunas: {', '.join(missing)}"
        )


def _create_worksheet(
    spreadsheet: Spreadsheet, worksheet_name: str, header: list[str]
) -> Worksheet:
    """
    Cria uma nova aba em uma planilha do Google Sheets com um cabeçalho especificado.

    Args:
        spreadsheet (Spreadsheet): A planilha onde a nova aba será criada.
        worksheet_name (str): Nome da nova aba a ser criada.
        header (list[str]): Lista de strings representando o cabeçalho da nova aba.

    Returns:
        Worksheet: A aba criada.
    """
    logger.debug("Criando a aba '%s' na planilha '%s'.", worksheet_name, spreadsheet.title)
    worksheet = retry(
        lambda: spreadsheet.add_worksheet(title=worksheet_name, rows=100, cols=max(len(header), 1))
    )
    if header:
        retry(lambda: worksheet.insert_row(header, index=1))
    logger.info("Aba criada com sucesso: %s", worksheet.title)
    return worksheet


def _open_worksheet(
    spreadsheet: Spreadsheet,
    worksheet_name: str,
    header: list[str],
    create: bool,
) -> Worksheet:
    try:
        worksheet = retry(lambda: spreadsheet.worksheet(worksheet_name))

        if header:
            _ensure_header(worksheet, header)

        logger.debug("Aba obtida com sucesso: %s", worksheet.title)
        return worksheet

    except WorksheetNotFound:
        logger.warning(
            "Aba '%s' não encontrada na planilha '%s'.", worksheet_name, spreadsheet.title
        )
        if create:
            return _create_worksheet(spreadsheet, worksheet_name, header)
        raise


def get_worksheet(
    spreadsheet: Spreadsheet,
    worksheet_name: str,
    header: list[str],
    create: bool,
) -> Worksheet:
    """
    Obtém uma aba de uma planilha do Google Sheets, validando o cabeçalho e criando a aba se necessário.

    Args:
        spreadsheet (Spreadsheet): A planilha do Google Sheets onde a aba será obtida.
        worksheet_name (str): Nome da aba a ser obtida.
        header (list[str]): Colunas que a aba precisa conter.
        create (bool): Indica se a aba deve ser criada se não existir.

    Returns:
        Worksheet: A aba obtida ou criada.

    Raises:
        WorksheetNotFound: Se a aba não existir e create for False.
        BackendUnavailableError: Se a API falhar após as tentativas.
    """
    try:
        return _open_worksheet(spreadsheet, worksheet_name, header, create)

    except BACKEND_EXCEPTIONS as e:
        logger.error("Não foi possível obter a aba '%s': %s", worksheet_name, e)
        raise BackendUnavailableError(
            f"Não foi possível obter a aba '{worksheet_name}': {e}"
        ) from e
