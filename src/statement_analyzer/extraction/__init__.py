"""Document extraction module."""
from .processor import PDFProcessor
from .text_normalizer import TextNormalizer
from .loader import DocumentLoader

__all__ = ["PDFProcessor", "TextNormalizer", "DocumentLoader"]
