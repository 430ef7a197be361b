"""
Restrições de coluna avaliadas em memória antes de qualquer escrita.

As restrições não são persistidas na planilha: cada chamada de insert/update
declara quais regras valem para aquela operação.
"""
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..errors import ValidationError
from .row import Row

logger = logging.getLogger(__name__)


def is_empty(value: Any) -> bool:
    """Indica se um valor de célula deve ser considerado vazio."""
    return value is None or (isinstance(value, str) and not value.strip())


class ColumnRule:
    """
    Regra base de coluna.

    Subclasses implementam ``check`` e levantam ValidationError quando a
    linha candidata viola a regra frente às demais linhas da tabela.
    """

    def check(self, others: list[Row], candidate: Mapping[str, Any]) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class Required(ColumnRule):
    """A coluna precisa ter valor não vazio."""
    column: str

    def check(self, others: list[Row], candidate: Mapping[str, Any]) -> None:
        value = candidate.get(self.column)
        if is_empty(value):
            raise ValidationError(
                self.column,
                value,
                f"A coluna '{self.column}' é obrigatória.",
            )


@dataclass(frozen=True)
class Unique(ColumnRule):
    """
    O valor (ou a combinação de valores) não pode se repetir na tabela.

    Valores vazios não colidem entre si.
    """
    columns: tuple[str, ...]

    def __init__(self, *columns: str):
        if not columns:
            raise ValueError("Unique exige ao menos uma coluna.")
        object.__setattr__(self, "columns", tuple(columns))

    def _key(self, row: Mapping[str, Any]) -> tuple[Any, ...]:
        return tuple(row.get(column) for column in self.columns)

    def check(self, others: list[Row], candidate: Mapping[str, Any]) -> None:
        key = self._key(candidate)
        if any(is_empty(part) for part in key):
            return

        for row in others:
            if self._key(row) == key:
                column = ",".join(self.columns)
                value = key[0] if len(key) == 1 else key
                raise ValidationError(
                    column,
                    value,
                    f"Já existe uma linha com {column} = {value!r} (linha {row.row_number}).",
                )


@dataclass(frozen=True)
class ColumnConstraints:
    """
    Conjunto de regras declaradas para uma operação de escrita.

    Attributes:
        rules (tuple[ColumnRule, ...]): Regras avaliadas na ordem em que foram declaradas.
    """
    rules: tuple[ColumnRule, ...] = ()

    @classmethod
    def of(cls, *rules: ColumnRule) -> "ColumnConstraints":
        """Cria um conjunto de restrições a partir das regras informadas."""
        return cls(rules=tuple(rules))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[Any]]) -> "ColumnConstraints":
        """
        Cria restrições a partir do formato declarativo ``{"uniques": [...], "required": [...]}``.

        Em ``uniques``, cada item é o nome de uma coluna ou uma sequência de
        colunas formando uma chave composta.

        Args:
            mapping (Mapping[str, Iterable[Any]]): Declaração das restrições.

        Returns:
            ColumnConstraints: Regras equivalentes.
        """
        unknown = set(mapping) - {"uniques", "required"}
        if unknown:
            raise ValueError(f"Tipos de restrição desconhecidos: {sorted(unknown)}")

        rules: list[ColumnRule] = [Required(column) for column in mapping.get("required", [])]
        for unique in mapping.get("uniques", []):
            if isinstance(unique, str):
                rules.append(Unique(unique))
            else:
                rules.append(Unique(*unique))
        return cls(rules=tuple(rules))


def enforce_constraints(
    rows: list[Row],
    candidate: Mapping[str, Any],
    constraints: ColumnConstraints | Mapping[str, Iterable[Any]] | None,
) -> None:
    """
    Valida uma linha candidata contra as restrições e as demais linhas da tabela.

    A própria linha (mesmo ``row_number`` da candidata) é excluída da
    comparação, para que um update não conflite consigo mesmo.

    Args:
        rows (list[Row]): Linhas atuais da tabela.
        candidate (Mapping[str, Any]): Linha a ser gravada.
        constraints: Restrições da operação (ColumnConstraints, formato declarativo ou None).

    Raises:
        ValidationError: Se alguma regra for violada.
    """
    if not constraints:
        return
    if not isinstance(constraints, ColumnConstraints):
        constraints = ColumnConstraints.from_mapping(constraints)

    candidate_row_number = getattr(candidate, "row_number", None)
    others = [
        row for row in rows
        if candidate_row_number is None or row.row_number != candidate_row_number
    ]

    for rule in constraints.rules:
        try:
            rule.check(others, candidate)
        except ValidationError as e:
            logger.warning("Restrição violada na coluna '%s': %s", e.column, e)
            raise
