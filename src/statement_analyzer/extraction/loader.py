"""Turns uploaded files into pipeline input."""
import io
from pathlib import Path
from typing import Dict, List, Union

import pandas as pd

from ..parsing.models import DocumentKind, RawDocument
from ..utils.exceptions import ExtractionError, UnsupportedKindError
from ..utils.logger import get_logger
from .processor import PDFProcessor

logger = get_logger()


class DocumentLoader:
    """Loads PDF, CSV and Excel statements into RawDocuments."""

    EXTENSION_KINDS = {
        ".pdf": DocumentKind.TABULAR_DOCUMENT,
        ".csv": DocumentKind.DELIMITED_TEXT,
        ".xlsx": DocumentKind.SPREADSHEET,
        ".xls": DocumentKind.SPREADSHEET,
    }
    CSV_ENCODINGS = ["utf-8", "utf-8-sig", "latin1", "cp1252"]

    def __init__(self, pdf_processor: PDFProcessor = None):
        self.pdf_processor = pdf_processor or PDFProcessor()

    def kind_for(self, file_name: str) -> DocumentKind:
        """
        Map a file extension to a document kind.

        Raises:
            UnsupportedKindError: For any other extension
        """
        ext = Path(file_name).suffix.lower()
        if ext not in self.EXTENSION_KINDS:
            raise UnsupportedKindError(ext or file_name)
        return self.EXTENSION_KINDS[ext]

    def load_path(self, path: Union[str, Path]) -> RawDocument:
        """Load a statement file from disk."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return self.load_bytes(path.read_bytes(), path.name)

    def load_bytes(self, data: bytes, file_name: str) -> RawDocument:
        """
        Convert uploaded bytes into a RawDocument.

        Args:
            data: File contents
            file_name: Original file name, used to pick the kind

        Returns:
            RawDocument with text (PDF) or rows (CSV/Excel) as content
        """
        kind = self.kind_for(file_name)
        logger.info(f"Loading {file_name} as {kind.value}")

        if kind is DocumentKind.TABULAR_DOCUMENT:
            content = self.pdf_processor.extract_text(data, file_name)
        elif kind is DocumentKind.DELIMITED_TEXT:
            content = self._frame_to_rows(self._read_csv(data, file_name))
        else:
            content = self._frame_to_rows(self._read_excel(data, file_name))

        return RawDocument(content=content, declared_kind=kind.value)

    def _read_csv(self, data: bytes, file_name: str) -> pd.DataFrame:
        """Read CSV trying several encodings."""
        for encoding in self.CSV_ENCODINGS:
            try:
                df = pd.read_csv(io.BytesIO(data), encoding=encoding, skip_blank_lines=True)
                logger.debug(f"Loaded {file_name} with {encoding} encoding")
                return df
            except UnicodeDecodeError:
                continue
            except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
                raise ExtractionError(f"Error reading CSV file {file_name}: {e}")

        raise ExtractionError(f"Could not decode {file_name} with any of: {self.CSV_ENCODINGS}")

    def _read_excel(self, data: bytes, file_name: str) -> pd.DataFrame:
        """Read the first sheet of an Excel workbook."""
        try:
            return pd.read_excel(io.BytesIO(data), sheet_name=0)
        except (ValueError, ImportError, OSError) as e:
            raise ExtractionError(f"Error reading Excel file {file_name}: {e}")

    @staticmethod
    def _frame_to_rows(df: pd.DataFrame) -> List[Dict]:
        """Ordered field maps, one per non-empty row."""
        df = df.dropna(how="all")
        df.columns = [str(c).strip() for c in df.columns]
        return df.to_dict(orient="records")
