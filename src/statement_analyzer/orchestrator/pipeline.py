"""End-to-end statement analysis pipeline."""
import time
import uuid
from collections.abc import Sequence
from typing import List, Optional, Tuple

from ..analysis import Aggregator, AnalysisResult, Categorizer, RecommendationGenerator, Transaction
from ..config import AppSettings, KeywordTables, get_keyword_tables, get_settings
from ..extraction import TextNormalizer
from ..parsing import (
    CascadingMatcher,
    Diagnostics,
    Dialect,
    DialectDetector,
    DocumentKind,
    LineClassifier,
    LocaleNormalizer,
    RawDocument,
    RowReader,
    TextLine,
    TransactionFactory,
    UnmatchedLine,
    deduplicate
)
from ..parsing.records import id_sequence
from ..utils.exceptions import (
    AmbiguousAmountError,
    EmptyInputError,
    ExtractionError,
    InvalidRecordError,
    NoTransactionsFoundError,
    UnsupportedKindError
)
from ..utils.logger import configure_logging, get_logger, set_analysis_context

logger = get_logger()


class StatementPipeline:
    """Runs detection, matching, normalization and analysis for one document at a time."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        tables: Optional[KeywordTables] = None,
        reference_year: Optional[int] = None
    ):
        """
        Initialize pipeline.

        Args:
            settings: Application settings (defaults to the packaged settings)
            tables: Keyword tables (defaults to the packaged keywords)
            reference_year: Year assumed for DD/MM dates, overriding settings
        """
        self.settings = settings or get_settings()
        self.tables = tables or get_keyword_tables()
        self.reference_year = reference_year or self.settings.reference_year

        configure_logging(
            self.settings.log_level,
            self.settings.log_dir,
            self.settings.log_max_file_size_mb,
            self.settings.log_backup_count
        )

        self.text_normalizer = TextNormalizer()
        self.detector = DialectDetector(self.tables)
        self.classifier = LineClassifier(self.tables, self.settings.min_line_length)
        self.matcher = CascadingMatcher(self.tables)
        self.categorizer = Categorizer(self.tables)
        self.aggregator = Aggregator(self.categorizer)
        self.recommender = RecommendationGenerator(self.settings)

    def analyze(self, document: RawDocument) -> AnalysisResult:
        """
        Analyze a document.

        Args:
            document: Text or rows plus their declared kind

        Returns:
            AnalysisResult with recommendations

        Raises:
            UnsupportedKindError: If the declared kind is unknown
            EmptyInputError: If the document holds nothing to parse
            NoTransactionsFoundError: If no transaction survives parsing
        """
        result, _ = self.analyze_with_diagnostics(document)
        return result

    def analyze_with_diagnostics(self, document: RawDocument) -> Tuple[AnalysisResult, Diagnostics]:
        """Analyze a document and also return the record-level diagnostics."""
        kind = self._resolve_kind(document.declared_kind)

        analysis_id = str(uuid.uuid4())
        set_analysis_context(analysis_id)
        start_time = time.time()

        try:
            diagnostics = Diagnostics()
            # Fresh per run, so ids restart for every document
            ids = id_sequence()
            normalizer = LocaleNormalizer(self.reference_year)

            if kind is DocumentKind.TABULAR_DOCUMENT:
                dialect, transactions = self._parse_text(document.content, normalizer, ids, diagnostics)
            else:
                dialect = None
                transactions = self._parse_rows(document.content, normalizer, ids, diagnostics)

            transactions, removed = deduplicate(transactions)
            diagnostics.duplicates_removed = removed

            if not transactions:
                raise NoTransactionsFoundError(
                    f"No transactions found in {kind.value} document "
                    f"({diagnostics.unmatched_lines} unmatched lines, "
                    f"{diagnostics.invalid_records} invalid records)"
                )

            transactions = self.categorizer.categorize(transactions)
            result = self.aggregator.aggregate(
                transactions,
                analysis_id,
                dialect.value if dialect else None
            )
            result = result.model_copy(update={"recommendations": self.recommender.generate(result)})

            duration = time.time() - start_time
            logger.info(
                f"Analysis complete: {result.transaction_count} transactions, "
                f"{diagnostics.noise_lines} noise, {diagnostics.unmatched_lines} unmatched, "
                f"{diagnostics.invalid_records} invalid, {diagnostics.duplicates_removed} duplicates "
                f"in {duration:.2f}s"
            )
            return result, diagnostics

        finally:
            set_analysis_context(None)

    def _resolve_kind(self, declared_kind) -> DocumentKind:
        try:
            return DocumentKind(declared_kind)
        except ValueError:
            raise UnsupportedKindError(declared_kind)

    def _parse_text(
        self,
        content,
        normalizer: LocaleNormalizer,
        ids,
        diagnostics: Diagnostics
    ) -> Tuple[Dialect, List[Transaction]]:
        """Line-oriented path for extracted document text."""
        text = self._decode(content)
        lines = self.text_normalizer.to_lines(text)
        if not lines:
            raise EmptyInputError("Document contains no text lines")

        diagnostics.total_lines = len(lines)
        dialect, scores = self.detector.detect(text)
        logger.info(
            f"Detected dialect {dialect.value} "
            f"(scores: {', '.join(f'{d.value}={s}' for d, s in scores.items())})"
        )

        factory = TransactionFactory(normalizer, ids)
        transactions = []

        for classified in self.classifier.classify_all(lines, dialect):
            if not classified.is_candidate:
                diagnostics.noise_lines += 1
                continue

            line = classified.line
            try:
                raw = self.matcher.match(line, dialect)
                if raw is None:
                    self._record_unmatched(line, diagnostics)
                    continue
                transactions.append(factory.from_raw(raw))
            except AmbiguousAmountError as e:
                diagnostics.ambiguous_amounts += 1
                logger.debug(f"Line {line.index} skipped: {e}")
            except InvalidRecordError as e:
                diagnostics.invalid_records += 1
                logger.debug(f"Line {line.index} skipped: {e}")

        logger.info(f"Parsed {len(transactions)} transactions from {len(lines)} lines")
        return dialect, transactions

    def _parse_rows(
        self,
        content,
        normalizer: LocaleNormalizer,
        ids,
        diagnostics: Diagnostics
    ) -> List[Transaction]:
        """Field-map path for delimited-text and spreadsheet rows."""
        if isinstance(content, (str, bytes)) or not isinstance(content, Sequence):
            raise ExtractionError("Row documents must carry a sequence of field maps")
        if not content:
            raise EmptyInputError("Document contains no rows")

        diagnostics.total_lines = len(content)
        reader = RowReader(normalizer, self.tables, ids)
        transactions, invalid = reader.read_rows(content)
        diagnostics.invalid_records += invalid

        logger.info(f"Parsed {len(transactions)} transactions from {len(content)} rows")
        return transactions

    def _record_unmatched(self, line: TextLine, diagnostics: Diagnostics):
        fragment = self.matcher.date_fragment(line.content)
        diagnostics.unmatched_lines += 1
        if len(diagnostics.unmatched_samples) < self.settings.unmatched_sample_limit:
            diagnostics.unmatched_samples.append(UnmatchedLine(line, fragment))
        logger.debug(f"Line {line.index} matched no grammar (date fragment: {fragment}): {line.content!r}")

    @staticmethod
    def _decode(content) -> str:
        if isinstance(content, bytes):
            return content.decode("utf-8", errors="replace")
        if isinstance(content, str):
            return content
        raise ExtractionError(f"Tabular documents must carry extracted text, got {type(content).__name__}")
