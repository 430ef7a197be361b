import logging

from gspread import Client, Spreadsheet, SpreadsheetNotFound
from gspread.exceptions import APIError
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

from ..config import Config
from ..errors import BackendUnavailableError
from ._retry import retry
from .client import SheetsClient


logger = logging.getLogger(__name__)

SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
]


def _connect_service_account(service_account_file: str) -> Client:
    """
    Conecta-se à API do Google Sheets usando um arquivo de conta de serviço.

    Args:
        service_account_file (str): Caminho para o arquivo de conta de serviço JSON.

    Returns:
        Client: Cliente autenticado do gspread.
    """
    logger.debug("Carregando credenciais da conta de serviço: %s", service_account_file)
    credentials = Credentials.from_service_account_file(
        service_account_file,
        scopes=SCOPES,
    )
    return Client(auth=credentials)


def get_spreadsheet(spreadsheet_id: str, service_account_file: str) -> Spreadsheet:
    """
    Abre uma planilha do Google Sheets pelo seu ID.

    Falhas de autenticação ou de rede (após o retry) são convertidas em
    BackendUnavailableError. Uma planilha inexistente continua sendo
    SpreadsheetNotFound, pois é erro de configuração e não de disponibilidade.

    Args:
        spreadsheet_id (str): ID da planilha do Google Sheets.
        service_account_file (str): Caminho para o arquivo de conta de serviço JSON.

    Returns:
        Spreadsheet: Objeto da planilha obtida.
    """
    client = _connect_service_account(service_account_file)

    try:
        spreadsheet = retry(lambda: client.open_by_key(spreadsheet_id))

    except SpreadsheetNotFound:
        logger.error("Planilha com ID %s não encontrada.", spreadsheet_id)
        raise

    except (APIError, GoogleAuthError, OSError) as e:
        logger.error("Não foi possível abrir a planilha %s: %s", spreadsheet_id, e)
        raise BackendUnavailableError(
            f"Não foi possível abrir a planilha '{spreadsheet_id}': {e}"
        ) from e

    logger.info("Planilha aberta com sucesso: %s", spreadsheet.title)
    return spreadsheet


def open_client(config: Config) -> SheetsClient:
    """
    Cria o cliente de backend para a planilha configurada.

    Args:
        config (Config): Configuração com ID da planilha e arquivo de conta de serviço.

    Returns:
        SheetsClient: Cliente pronto para ser usado por um TableStore.
    """
    spreadsheet = get_spreadsheet(config.spreadsheet_id, config.service_account_file)
    return SheetsClient(spreadsheet)
