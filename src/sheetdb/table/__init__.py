"""
Motor de tabelas sobre o Google Sheets.

Módulos:
    - row: Codec entre Row e listas de valores
    - reader: Leitura completa de uma aba
    - constraints: Regras de coluna (Required, Unique)
    - coordinator: Porta global de escrita
    - store: Fachada CRUD (TableStore)
"""

from .constraints import ColumnConstraints, ColumnRule, Required, Unique, enforce_constraints
from .coordinator import WRITE_GATE, WriteGate
from .reader import Table, open_table
from .row import Row, UpdatedRow, process_updated_data, row_to_values, values_to_row
from .store import TableStore

__all__ = [
    "ColumnConstraints",
    "ColumnRule",
    "Required",
    "Unique",
    "enforce_constraints",
    "WRITE_GATE",
    "WriteGate",
    "Table",
    "open_table",
    "Row",
    "UpdatedRow",
    "process_updated_data",
    "row_to_values",
    "values_to_row",
    "TableStore",
]
