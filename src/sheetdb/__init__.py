"""
sheetdb

Armazenamento de registros do site de cadastro por convite usando o
Google Sheets como banco de dados.

Este módulo expõe as principais classes para uso externo:

- Config: Configuração de acesso à planilha
- TableStore: Fachada CRUD sobre as abas
- GoogleSheetsDataProvider: Persistência de usuários, credenciais, convites e shares
"""

from .__version__ import __version__
from .config import Config
from .errors import (
    BackendUnavailableError,
    DataIntegrityError,
    MalformedResponseError,
    NotFoundError,
    SheetDBError,
    ValidationError,
)
from .gateway import open_client
from .provider import GoogleSheetsDataProvider
from .table import ColumnConstraints, Required, Row, TableStore, Unique

__all__ = [
    '__version__',
    'Config',
    'BackendUnavailableError',
    'DataIntegrityError',
    'MalformedResponseError',
    'NotFoundError',
    'SheetDBError',
    'ValidationError',
    'open_client',
    'GoogleSheetsDataProvider',
    'ColumnConstraints',
    'Required',
    'Row',
    'TableStore',
    'Unique',
]
