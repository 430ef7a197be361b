"""
Testes unitários para o codec de linhas.
"""
import pytest

from sheetdb.errors import MalformedResponseError
from sheetdb.table.row import (
    Row,
    UpdatedRow,
    parse_row_number,
    process_updated_data,
    row_to_values,
    values_to_row,
)

COLUMNS = ["id", "email", "is_admin"]


class TestRow:
    """Testes para a classe Row."""

    def test_row_keeps_row_number_outside_fields(self):
        """O número da linha não deve aparecer como campo."""
        row = Row({"id": "1"}, row_number=5)

        assert row.row_number == 5
        assert dict(row) == {"id": "1"}
        assert "row_number" not in row

    def test_new_row_has_no_row_number(self):
        """Linhas ainda não gravadas não têm número."""
        assert Row({"id": "1"}).row_number is None

    def test_repr_shows_row_number(self):
        """repr deve incluir campos e número da linha."""
        assert repr(Row({"id": "1"}, row_number=2)) == "Row({'id': '1'}, row_number=2)"


class TestRowToValues:
    """Testes para row_to_values."""

    def test_orders_values_by_columns(self):
        """Deve seguir a ordem das colunas, não a do dicionário."""
        row = {"is_admin": True, "id": "1", "email": "a@x.com"}

        assert row_to_values(row, COLUMNS) == ["1", "a@x.com", True]

    def test_missing_and_none_become_empty_cells(self):
        """Colunas ausentes ou None viram células vazias."""
        assert row_to_values({"id": "1", "email": None}, COLUMNS) == ["1", "", ""]

    def test_unknown_fields_are_ignored(self):
        """Campos sem coluna não entram na lista."""
        assert row_to_values({"id": "1", "nickname": "x"}, ["id"]) == ["1"]

    def test_falsy_values_are_preserved(self):
        """False e 0 não devem ser confundidos com ausência."""
        assert row_to_values({"id": 0, "is_admin": False}, COLUMNS) == [0, "", False]


class TestValuesToRow:
    """Testes para values_to_row."""

    def test_zips_columns_and_values(self):
        """Deve associar cada valor à coluna da mesma posição."""
        row = values_to_row(["1", "a@x.com", False], COLUMNS, 3)

        assert row == {"id": "1", "email": "a@x.com", "is_admin": False}
        assert row.row_number == 3

    def test_short_values_leave_columns_absent(self):
        """Colunas além dos valores ficam ausentes, não vazias."""
        row = values_to_row(["1"], COLUMNS, 2)

        assert row == {"id": "1"}
        assert "email" not in row

    def test_empty_cell_in_middle_is_kept_as_empty(self):
        """Células vazias no meio continuam presentes como ""."""
        row = values_to_row(["1", "", True], COLUMNS, 2)

        assert row["email"] == ""

    def test_extra_values_are_dropped(self):
        """Valores além das colunas conhecidas são descartados."""
        assert values_to_row(["1", "a", True, "extra"], COLUMNS, 2) == {
            "id": "1",
            "email": "a",
            "is_admin": True,
        }


class TestParseRowNumber:
    """Testes para parse_row_number."""

    @pytest.mark.parametrize(
        "updated_range, expected",
        [
            ("users!A5:C5", 5),
            ("users!A12", 12),
            ("users!7:7", 7),
            ("A9:C9", 9),
            ("users!AA40:AC40", 40),
        ],
    )
    def test_single_row_references(self, updated_range, expected):
        """Deve extrair a linha das formas aceitas."""
        assert parse_row_number(updated_range, "users") == expected

    def test_quoted_sheet_name(self):
        """Nomes entre aspas, com aspas duplicadas, devem ser reconhecidos."""
        assert parse_row_number("'Bob''s Sheet'!A3:B3", "Bob's Sheet") == 3

    @pytest.mark.parametrize(
        "updated_range",
        [
            "users!A5:C6",
            "users!A:C",
            "users!5:6",
            "users!A5:C",
            "users!A5,users!A6",
            "",
            "users",
            "users!A0",
        ],
    )
    def test_ambiguous_or_invalid_references_fail(self, updated_range):
        """Referências de várias linhas ou sem linha são malformadas."""
        with pytest.raises(MalformedResponseError):
            parse_row_number(updated_range, "users")

    def test_other_sheet_fails(self):
        """Referência de outra aba é malformada."""
        with pytest.raises(MalformedResponseError, match="não pertence"):
            parse_row_number("invites!A5:C5", "users")


class TestProcessUpdatedData:
    """Testes para process_updated_data."""

    def test_returns_persisted_values_and_row_number(self):
        """Deve usar os valores ecoados pelo backend."""
        result = process_updated_data(
            {"range": "users!A4:C4", "values": [["1", "A@X.COM", True]]},
            "users",
            ["1", "a@x.com", True],
        )

        assert result == UpdatedRow(updated_row_values=["1", "A@X.COM", True], updated_row_number=4)

    def test_falls_back_to_sent_values(self):
        """Sem valores ecoados, usa os valores enviados."""
        result = process_updated_data({"range": "users!A4:C4"}, "users", ["1", "a", True])

        assert result.updated_row_values == ["1", "a", True]
        assert result.updated_row_number == 4

    def test_multiple_rows_in_values_fails(self):
        """Mais de uma linha ecoada é malformada."""
        with pytest.raises(MalformedResponseError):
            process_updated_data(
                {"range": "users!A4:C4", "values": [["1"], ["2"]]}, "users", ["1"]
            )

    def test_missing_range_fails(self):
        """Resposta sem range é malformada."""
        with pytest.raises(MalformedResponseError):
            process_updated_data({"values": [["1"]]}, "users", ["1"])
