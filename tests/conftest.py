"""Configuração de testes pytest."""
import sys
from pathlib import Path

import pytest

# Adicionar src ao path para importação dos módulos
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from fakes import FakeSpreadsheet  # noqa: E402
from sheetdb.gateway import _retry, configure_rate_limiting  # noqa: E402
from sheetdb.gateway.client import SheetsClient  # noqa: E402
from sheetdb.table import TableStore, WriteGate  # noqa: E402


@pytest.fixture(autouse=True)
def no_rate_limit():
    """Desativa o intervalo mínimo entre requisições durante os testes."""
    configure_rate_limiting(0.0)
    _retry._last_request_time = 0.0
    yield


@pytest.fixture
def spreadsheet():
    """Planilha em memória com uma aba users vazia (apenas cabeçalho)."""
    return FakeSpreadsheet({"users": [["id", "email"]]})


@pytest.fixture
def store(spreadsheet):
    """TableStore sobre a planilha em memória, com porta de escrita própria."""
    return TableStore(SheetsClient(spreadsheet), gate=WriteGate())
