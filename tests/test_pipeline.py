"""Tests for the end-to-end statement pipeline."""
import json
import unittest
from datetime import datetime

from statement_analyzer import DocumentLoader, RawDocument, StatementPipeline
from statement_analyzer.utils.exceptions import (
    EmptyInputError,
    ExtractionError,
    NoTransactionsFoundError,
    UnsupportedKindError
)

CREDIT_STATEMENT = "\n".join([
    "ESTADO DE CUENTA",
    "TARJETA DE CREDITO",
    "Las Condes 19/07/2025 Mercadopago *sociedad A2 89.990 89.990 01/01 sep-2025 89.990",
    "S/I27/07/2025Compra falabella plaza vespucio T37.90537.90501/01sep-202537.905",
    "06/08/2025Anulacion pago automatico abono T17.040-17.04001/01sep-2025-17.040",
    "Providencia 31/02/2025 Compra invalida en tienda 12.500",
    "Texto informativo sin fecha que no corresponde a movimiento",
])

REVERSAL_LINE = "06/08/2025Anulacion pago automatico abono T17.040-17.04001/01sep-2025-17.040"
NETFLIX_LINE = "Las Condes 20/07/2025 Netflix.com A2 9.990 9.990 01/01 sep-2025 9.990"

RUNNING_LEDGER = "\n".join([
    "CUENTA CORRIENTE",
    "SALDO INICIAL 1.000.000 AL 31/07/2025",
    "03/08Agustinas0797601101 Pago servicio luz 45.000 1.250.000",
    "04/08Agustinas0797601101 Sueldo empresa 1.500.000 2.750.000",
    "05/08AgustinasTraspaso Internet a T. Crédito2.561.017",
])


class TestCreditStatementPipeline(unittest.TestCase):
    """Test analysis of credit card statement text."""

    def setUp(self):
        """Set up test fixtures."""
        self.pipeline = StatementPipeline(reference_year=2025)
        self.result, self.diagnostics = self.pipeline.analyze_with_diagnostics(
            RawDocument(CREDIT_STATEMENT, "tabular-document")
        )

    def test_transactions(self):
        """Test the three transaction lines are extracted."""
        self.assertEqual(self.result.dialect, "credit_statement")
        self.assertEqual(self.result.transaction_count, 3)

        first, second, third = self.result.transactions
        self.assertEqual(first.date, datetime(2025, 7, 19))
        self.assertEqual(first.description, "Mercadopago *sociedad")
        self.assertEqual(first.amount, 89990.0)
        self.assertEqual(first.type, "expense")
        self.assertIn(first.category, ("Shopping", "Other"))

        self.assertEqual(second.date, datetime(2025, 7, 27))
        self.assertEqual(second.location, "Unidentified")
        self.assertEqual(second.amount, 37905.0)
        self.assertEqual(second.type, "expense")

        self.assertEqual(third.date, datetime(2025, 8, 6))
        self.assertEqual(third.signed_amount, -17040.0)
        self.assertTrue(third.is_reversal)
        self.assertEqual(third.type, "expense")
        self.assertNotEqual(third.category, "Income")

    def test_totals(self):
        """Test the reversal reduces expenses instead of adding income."""
        self.assertEqual(self.result.total_income, 0.0)
        self.assertEqual(self.result.total_expenses, 110855.0)
        self.assertEqual(self.result.total_savings, -110855.0)
        self.assertEqual(self.result.savings_rate, 0.0)
        self.assertAlmostEqual(
            sum(c.percentage_of_expenses for c in self.result.category_breakdown), 100.0, places=1
        )

    def test_diagnostics(self):
        """Test record-level failures are counted, not raised."""
        self.assertEqual(self.diagnostics.total_lines, 7)
        self.assertEqual(self.diagnostics.noise_lines, 2)
        self.assertEqual(self.diagnostics.unmatched_lines, 1)
        self.assertEqual(self.diagnostics.invalid_records, 1)
        self.assertEqual(self.diagnostics.duplicates_removed, 0)
        self.assertIsNone(self.diagnostics.unmatched_samples[0].date_fragment)

    def test_recommendations(self):
        """Test negative savings triggers savings advice."""
        self.assertEqual(self.result.recommendations[0].id, "improve-savings-rate")

    def test_ids_unique_and_per_run(self):
        """Test ids are unique and restart for every run."""
        ids = [t.id for t in self.result.transactions]
        self.assertEqual(len(set(ids)), len(ids))

        again = self.pipeline.analyze(RawDocument(CREDIT_STATEMENT, "tabular-document"))
        self.assertEqual([t.id for t in again.transactions], ids)
        self.assertNotEqual(again.analysis_id, self.result.analysis_id)

    def test_json_serialization(self):
        """Test camelCase keys, plain numbers and ISO timestamps."""
        data = self.result.to_json_dict()

        self.assertEqual(data["totalExpenses"], 110855.0)
        self.assertIn("categoryBreakdown", data)
        self.assertIn("percentageOfExpenses", data["categoryBreakdown"][0])
        self.assertTrue(data["dateRange"]["start"].startswith("2025-07-19T00:00:00"))
        self.assertTrue(data["dateRange"]["end"].startswith("2025-08-06T00:00:00"))
        self.assertEqual(data["transactions"][2]["signedAmount"], -17040.0)
        # Must be plain JSON
        json.dumps(data)

    def test_bytes_content(self):
        """Test UTF-8 bytes are accepted for text documents."""
        result = self.pipeline.analyze(
            RawDocument(CREDIT_STATEMENT.encode("utf-8"), "tabular-document")
        )
        self.assertEqual(result.transaction_count, 3)


class TestRunningLedgerPipeline(unittest.TestCase):
    """Test analysis of checking account text."""

    def setUp(self):
        """Set up test fixtures."""
        self.pipeline = StatementPipeline(reference_year=2025)

    def test_ledger_analysis(self):
        """Test ledger sign heuristics and reference year."""
        result, diagnostics = self.pipeline.analyze_with_diagnostics(
            RawDocument(RUNNING_LEDGER, "tabular-document")
        )

        self.assertEqual(result.dialect, "running_ledger")
        self.assertEqual(result.transaction_count, 3)
        self.assertEqual(result.total_income, 1500000.0)
        self.assertEqual(result.total_expenses, 2606017.0)
        self.assertEqual(result.total_savings, -1106017.0)
        self.assertEqual(result.date_range.start, datetime(2025, 8, 3))
        self.assertEqual(result.date_range.end, datetime(2025, 8, 5))
        self.assertEqual(diagnostics.noise_lines, 2)

        categories = {t.description: t.category for t in result.transactions}
        self.assertEqual(categories["Pago servicio luz"], "Utilities")
        self.assertEqual(categories["Sueldo empresa"], "Income")


class TestRowPipeline(unittest.TestCase):
    """Test analysis of delimited and spreadsheet rows."""

    def setUp(self):
        """Set up test fixtures."""
        self.pipeline = StatementPipeline(reference_year=2025)

    def test_csv_document(self):
        """Test CSV bytes through the loader and the pipeline."""
        data = (
            "Fecha,Descripcion,Monto\n"
            "15/03/2025,Supermercado Lider,-25000\n"
            "20/03/2025,Sueldo marzo,1500000\n"
            "21/03/2025,Monto cero,0\n"
        ).encode("utf-8")
        document = DocumentLoader().load_bytes(data, "movimientos.csv")
        result, diagnostics = self.pipeline.analyze_with_diagnostics(document)

        self.assertIsNone(result.dialect)
        self.assertEqual(result.transaction_count, 2)
        self.assertEqual(result.total_income, 1500000.0)
        self.assertEqual(result.total_expenses, 25000.0)
        self.assertEqual(result.category_breakdown[0].name, "Food & Dining")
        self.assertEqual(diagnostics.invalid_records, 1)

    def test_spreadsheet_rows(self):
        """Test pre-parsed spreadsheet rows with debit and credit columns."""
        rows = [
            {"Fecha": 45736, "Concepto": "Farmacia Ahumada", "Cargo": 12000, "Abono": None},
            {"Fecha": 45737, "Concepto": "Remuneracion marzo", "Cargo": None, "Abono": 900000},
        ]
        result = self.pipeline.analyze(RawDocument(rows, "spreadsheet"))

        self.assertEqual(result.total_income, 900000.0)
        self.assertEqual(result.total_expenses, 12000.0)
        self.assertEqual(result.date_range.start, datetime(2025, 3, 20))


class TestReversalPipeline(unittest.TestCase):
    """Test documents where reversals dominate."""

    def setUp(self):
        """Set up test fixtures."""
        self.pipeline = StatementPipeline(reference_year=2025)

    def test_reversal_only_document(self):
        """Test a statement holding just a reversal."""
        result = self.pipeline.analyze(RawDocument(REVERSAL_LINE, "tabular-document"))

        self.assertEqual(result.transaction_count, 1)
        self.assertEqual(result.total_income, 0.0)
        self.assertEqual(result.total_expenses, 0.0)
        self.assertEqual(result.total_savings, 0.0)
        self.assertAlmostEqual(
            sum(c.percentage_of_expenses for c in result.category_breakdown), 100.0, places=1
        )

    def test_purchase_and_larger_reversal(self):
        """Test breakdown shares with a reversal larger than the purchases."""
        text = "\n".join([NETFLIX_LINE, REVERSAL_LINE])
        result = self.pipeline.analyze(RawDocument(text, "tabular-document"))

        self.assertEqual(result.total_expenses, 0.0)
        names = [c.name for c in result.category_breakdown]
        self.assertEqual(names, ["Entertainment", "Other"])
        self.assertAlmostEqual(
            sum(c.percentage_of_expenses for c in result.category_breakdown), 100.0, places=1
        )


class TestPipelineErrors(unittest.TestCase):
    """Test document-level failures."""

    def setUp(self):
        """Set up test fixtures."""
        self.pipeline = StatementPipeline(reference_year=2025)

    def test_unsupported_kind(self):
        """Test unknown document kinds."""
        with self.assertRaises(UnsupportedKindError):
            self.pipeline.analyze(RawDocument("text", "image"))

    def test_empty_input(self):
        """Test documents with nothing to parse."""
        with self.assertRaises(EmptyInputError):
            self.pipeline.analyze(RawDocument("   \n\n", "tabular-document"))
        with self.assertRaises(EmptyInputError):
            self.pipeline.analyze(RawDocument([], "spreadsheet"))

    def test_wrong_content_type(self):
        """Test rows declared as text and text declared as rows."""
        with self.assertRaises(ExtractionError):
            self.pipeline.analyze(RawDocument([{"a": 1}], "tabular-document"))
        with self.assertRaises(ExtractionError):
            self.pipeline.analyze(RawDocument("a,b\n1,2", "delimited-text"))

    def test_noise_only_document(self):
        """Test a document holding only noise."""
        with self.assertRaises(NoTransactionsFoundError) as ctx:
            self.pipeline.analyze(RawDocument("ESTADO DE CUENTA", "tabular-document"))
        self.assertIn("CSV", ctx.exception.hint)

    def test_no_matching_lines(self):
        """Test a document whose lines match no grammar."""
        text = "TARJETA DE CREDITO\nEste texto no tiene fecha ni monto alguno en absoluto"
        with self.assertRaises(NoTransactionsFoundError):
            self.pipeline.analyze(RawDocument(text, "tabular-document"))

    def test_duplicate_lines(self):
        """Test a line repeated in the document yields one transaction."""
        line = "Las Condes 19/07/2025 Mercadopago *sociedad A2 89.990 89.990 01/01 sep-2025 89.990"
        result, diagnostics = self.pipeline.analyze_with_diagnostics(
            RawDocument("\n".join([line, line]), "tabular-document")
        )

        self.assertEqual(result.transaction_count, 1)
        self.assertEqual(diagnostics.duplicates_removed, 1)


if __name__ == "__main__":
    unittest.main()
