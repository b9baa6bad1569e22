"""Text cleanup for extracted statement text."""
import re
import unicodedata
from typing import List

from ..parsing.models import TextLine
from ..utils.logger import get_logger

logger = get_logger()


class TextNormalizer:
    """Normalizes extracted statement text into ordered lines."""

    # Common PDF artifacts to remove
    ARTIFACTS = [
        r"^[ \t]*P[aá]gina \d+( de \d+)?[ \t]*$",
        r"^[ \t]*Page \d+( of \d+)?[ \t]*$",
    ]

    def normalize(self, text: str) -> str:
        """
        Normalize statement text.

        Args:
            text: Raw extracted text

        Returns:
            Normalized text
        """
        if not text:
            return ""

        # Normalize Unicode so "Crédito" compares equal however it was encoded
        text = unicodedata.normalize("NFC", text)
        text = text.replace("\r\n", "\n").replace("\r", "\n")

        text = self.strip_artifacts(text)
        text = self._clean_whitespace(text)

        logger.debug(f"Normalized text to {len(text)} characters")
        return text

    def to_lines(self, text: str) -> List[TextLine]:
        """
        Split normalized text into non-empty, ordered lines.

        Args:
            text: Raw extracted text

        Returns:
            TextLines indexed by their position in the original text
        """
        normalized = self.normalize(text)
        return [
            TextLine(index=index, content=line)
            for index, line in enumerate(normalized.split("\n"))
            if line
        ]

    def strip_artifacts(self, text: str) -> str:
        """
        Remove page numbering lines.

        Args:
            text: Text with artifacts

        Returns:
            Cleaned text
        """
        for pattern in self.ARTIFACTS:
            text = re.sub(pattern, "", text, flags=re.MULTILINE | re.IGNORECASE)
        return text

    def _clean_whitespace(self, text: str) -> str:
        """Collapse runs of spaces and tabs, strip every line."""
        text = re.sub(r"[ \t ]+", " ", text)
        return "\n".join(line.strip() for line in text.split("\n"))
