"""
Gateway para acesso ao Google Sheets.

Este módulo encapsula a comunicação com a API do Google Sheets,
fornecendo uma interface única para a camada de tabelas.

Módulos:
    - connection: Conexão e abertura da planilha
    - client: Chamadas de valores, batch update e metadados
    - worksheet: Criação de abas e validação de cabeçalho
"""

from ._retry import configure_rate_limiting
from .client import SheetInfo, SheetsClient, a1_range, quote_sheet_name
from .connection import get_spreadsheet, open_client
from .worksheet import get_header_mapping, get_worksheet

__all__ = [
    "SheetInfo",
    "SheetsClient",
    "a1_range",
    "quote_sheet_name",
    "get_spreadsheet",
    "open_client",
    "get_worksheet",
    "get_header_mapping",
    "configure_rate_limiting",
]
