"""Tests for delimited and spreadsheet row reading."""
import unittest
from datetime import date
from decimal import Decimal

import pandas as pd

from statement_analyzer.parsing import LocaleNormalizer, RowReader
from statement_analyzer.utils.exceptions import InvalidRecordError


class TestRowReader(unittest.TestCase):
    """Test RowReader functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.reader = RowReader(LocaleNormalizer(reference_year=2025))

    def test_locate_spanish_columns(self):
        """Test synonym substring matching on headers."""
        row = {"Fecha": "15/03/2025", "Descripcion": "Supermercado Lider", "Monto": "-25000"}
        columns = self.reader.locate_columns(row)

        self.assertEqual(columns["date"], "Fecha")
        self.assertEqual(columns["description"], "Descripcion")
        self.assertEqual(columns["amount"], "Monto")
        self.assertIsNone(columns["debit"])

    def test_amount_column(self):
        """Test signed amount column."""
        txn = self.reader.read_row(
            {"Fecha": "15/03/2025", "Descripcion": "Supermercado Lider", "Monto": "-25000"}
        )

        self.assertEqual(txn.date, date(2025, 3, 15))
        self.assertEqual(txn.description, "Supermercado Lider")
        self.assertEqual(txn.amount, Decimal("25000"))
        self.assertEqual(txn.signed_amount, Decimal("-25000"))
        self.assertEqual(txn.type, "expense")

    def test_debit_credit_columns(self):
        """Test amount derived from debit and credit columns."""
        debit = self.reader.read_row(
            {"Date": date(2025, 3, 1), "Description": "Coffee shop", "Debit": "4.50", "Credit": ""}
        )
        credit = self.reader.read_row(
            {"Date": date(2025, 3, 2), "Description": "Payroll deposit", "Debit": None, "Credit": 2500}
        )

        self.assertEqual(debit.signed_amount, Decimal("-4.50"))
        self.assertEqual(credit.signed_amount, Decimal("2500"))
        self.assertEqual(credit.type, "income")

    def test_debit_amount_header_is_not_amount(self):
        """Test "Debit Amount" is read as a debit column."""
        columns = self.reader.locate_columns(
            {"Date": "01/03/2025", "Memo": "Fee", "Debit Amount": 10, "Credit Amount": 0}
        )

        self.assertIsNone(columns["amount"])
        self.assertEqual(columns["debit"], "Debit Amount")
        self.assertEqual(columns["credit"], "Credit Amount")

    def test_invalid_rows(self):
        """Test rows that cannot become transactions."""
        bad_rows = [
            {"Descripcion": "Sin fecha", "Monto": "100"},
            {"Fecha": "15/03/2025", "Descripcion": "Sin monto"},
            {"Fecha": "15/03/2025", "Descripcion": "Monto cero", "Monto": 0},
            {"Fecha": "15/03/2025", "Descripcion": "ab", "Monto": 10},
            {"Fecha": "31/02/2025", "Descripcion": "Fecha imposible", "Monto": 10},
        ]
        for row in bad_rows:
            with self.assertRaises(InvalidRecordError, msg=str(row)):
                self.reader.read_row(row)

    def test_read_rows_counts_invalid(self):
        """Test invalid rows are skipped and counted."""
        rows = [
            {"Fecha": "15/03/2025", "Descripcion": "Supermercado Lider", "Monto": "-25000"},
            {"Fecha": "16/03/2025", "Descripcion": "Monto cero", "Monto": 0},
            "not a row",
            {"Fecha": 45736, "Descripcion": "Sueldo marzo", "Monto": 1500000},
        ]
        transactions, invalid = self.reader.read_rows(rows)

        self.assertEqual(len(transactions), 2)
        self.assertEqual(invalid, 2)
        self.assertEqual([t.id for t in transactions], ["txn-00001", "txn-00002"])
        self.assertEqual(transactions[1].date, date(2025, 3, 20))

    def test_read_rows_skips_unusable_date_cells(self):
        """Test empty and integer-encoded date cells skip only their row."""
        rows = [
            {"Fecha": pd.NaT, "Descripcion": "Fila sin fecha", "Monto": -1000},
            {"Fecha": 20250315, "Descripcion": "Fecha como entero", "Monto": -2000},
            {"Fecha": "15/03/2025", "Descripcion": "Supermercado Lider", "Monto": float("inf")},
            {"Fecha": "16/03/2025", "Descripcion": "Supermercado Lider", "Monto": -25000},
        ]
        transactions, invalid = self.reader.read_rows(rows)

        self.assertEqual(invalid, 3)
        self.assertEqual(len(transactions), 1)
        self.assertEqual(transactions[0].date, date(2025, 3, 16))


if __name__ == "__main__":
    unittest.main()
