"""
Hierarquia de exceções do armazenamento em planilhas.

Todas as exceções levantadas pela camada de tabelas derivam de SheetDBError,
permitindo que a camada de serviço trate falhas de forma uniforme:

- NotFoundError: nenhuma linha (ou aba) satisfaz a busca em update/delete
- ValidationError: restrição de coluna violada antes da escrita
- BackendUnavailableError: falha de rede/autenticação na API do Google Sheets
- MalformedResponseError: resposta de escrita que não pode ser interpretada
- DataIntegrityError: referência órfã entre registros ou cabeçalho com colunas repetidas
"""
from typing import Any


class SheetDBError(Exception):
    """Erro base do armazenamento em planilhas."""


class NotFoundError(SheetDBError):
    """Nenhuma linha corresponde ao predicado informado."""


class ValidationError(SheetDBError):
    """
    Uma restrição de coluna foi violada.

    Attributes:
        column (str): Coluna que violou a restrição (colunas compostas separadas por vírgula).
        value (Any): Valor ofensivo encontrado na linha candidata.
    """

    def __init__(self, column: str, value: Any, message: str):
        super().__init__(message)
        self.column = column
        self.value = value


class BackendUnavailableError(SheetDBError):
    """A API do Google Sheets falhou (rede, cota ou autenticação)."""


class MalformedResponseError(SheetDBError):
    """A confirmação de escrita do backend não pôde ser convertida em uma linha."""


class DataIntegrityError(SheetDBError):
    """Os dados da planilha estão inconsistentes (referência órfã ou cabeçalho ambíguo)."""
