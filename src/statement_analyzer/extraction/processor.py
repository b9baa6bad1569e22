"""PDF text extraction."""
import io
from typing import Optional

import pdfplumber
import pypdf

from ..utils.exceptions import ExtractionError
from ..utils.logger import get_logger

logger = get_logger()


class PDFProcessor:
    """Extracts flat text from PDF statements. Scanned documents are not supported."""

    MIN_TEXT_LENGTH = 50

    def extract_text(self, data: bytes, name: str = "document.pdf") -> str:
        """
        Extract text from PDF bytes.

        Args:
            data: PDF file contents
            name: File name, for logging

        Returns:
            Extracted text, pages separated by newlines

        Raises:
            ExtractionError: If the file is not a PDF or yields too little text
        """
        if not data:
            raise ExtractionError(f"{name} is empty")
        if not data[:5].startswith(b"%PDF"):
            raise ExtractionError(f"{name} is not a valid PDF file")

        # Try pdfplumber first
        text = self._extract_with_pdfplumber(data, name)

        if not text or len(text) < self.MIN_TEXT_LENGTH:
            # Fallback to pypdf
            logger.info(f"pdfplumber extracted {len(text) if text else 0} chars, trying pypdf for {name}")
            text = self._extract_with_pypdf(data, name)

        if not self.validate_extraction(text):
            raise ExtractionError(
                f"Extracted text too short ({len(text) if text else 0} chars, minimum {self.MIN_TEXT_LENGTH}). "
                f"{name} may be scanned, encrypted or corrupted."
            )

        logger.info(f"Successfully extracted {len(text)} characters from {name}")
        return text

    def validate_extraction(self, text: Optional[str]) -> bool:
        """Check the extracted text is long enough to hold transactions."""
        return bool(text) and len(text) >= self.MIN_TEXT_LENGTH

    def _extract_with_pdfplumber(self, data: bytes, name: str) -> Optional[str]:
        """
        Extract text using pdfplumber.

        Returns:
            Extracted text or None if failed
        """
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                text_parts = []
                for i, page in enumerate(pdf.pages, 1):
                    page_text = page.extract_text()
                    if page_text:
                        text_parts.append(page_text)
                        logger.debug(f"pdfplumber: Page {i} extracted {len(page_text)} chars")
                    else:
                        logger.debug(f"pdfplumber: Page {i} extracted no text")

                text = "\n".join(text_parts)
                logger.info(f"pdfplumber extracted {len(text)} chars from {len(pdf.pages)} pages in {name}")
                return text or None

        except Exception as e:
            logger.warning(f"pdfplumber extraction failed for {name}: {e}")
            return None

    def _extract_with_pypdf(self, data: bytes, name: str) -> Optional[str]:
        """
        Extract text using pypdf (fallback).

        Returns:
            Extracted text or None if failed
        """
        try:
            reader = pypdf.PdfReader(io.BytesIO(data))
            text_parts = []

            for i, page in enumerate(reader.pages, 1):
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)
                    logger.debug(f"pypdf: Page {i} extracted {len(page_text)} chars")

            text = "\n".join(text_parts)
            logger.info(f"pypdf extracted {len(text)} chars from {len(reader.pages)} pages in {name}")
            return text or None

        except Exception as e:
            logger.error(f"pypdf extraction failed for {name}: {e}")
            return None
