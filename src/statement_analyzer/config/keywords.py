"""Keyword tables driving noise filtering, dialect detection and categorization."""
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Pattern, Tuple

import yaml

from ..utils.exceptions import ConfigError

DEFAULT_KEYWORDS_PATH = Path(__file__).parent / "keywords.yaml"


def fold(text: str) -> str:
    """
    Uppercase text and strip diacritics for keyword comparison.

    "Tarjeta de Crédito" and "TARJETA DE CREDITO" fold to the same string.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).upper()


@dataclass(frozen=True)
class KeywordTables:
    """
    Immutable lookup tables shared across analysis runs.

    Category order is significant: categorization returns the first
    category whose keyword list matches.
    """
    categories: Tuple[Tuple[str, Tuple[str, ...]], ...]
    fallback_category: str
    category_colors: Tuple[str, ...]
    dialect_indicators: Dict[str, Tuple[str, ...]]
    noise_signatures: Dict[str, Tuple[Pattern, ...]]
    expense_keywords: Tuple[str, ...]
    column_synonyms: Dict[str, Tuple[str, ...]]
    income_categories: Tuple[str, ...] = ()

    @property
    def category_names(self) -> Tuple[str, ...]:
        """All category names in table order, catch-all last."""
        return tuple(name for name, _ in self.categories) + (self.fallback_category,)

    @classmethod
    def load(cls, path: Path = None) -> "KeywordTables":
        """Load keyword tables from YAML file."""
        path = path or DEFAULT_KEYWORDS_PATH

        if not path.exists():
            raise ConfigError(f"Keyword tables not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}")

        try:
            return cls.from_dict(data)
        except (KeyError, TypeError) as e:
            raise ConfigError(f"Invalid keyword tables in {path}: {e}")
        except re.error as e:
            raise ConfigError(f"Invalid noise signature in {path}: {e}")

    @classmethod
    def from_dict(cls, data: dict) -> "KeywordTables":
        """Build tables from an already parsed mapping."""
        return cls(
            categories=tuple(
                (entry["name"], tuple(fold(str(k)) for k in entry["keywords"]))
                for entry in data["categories"]
            ),
            fallback_category=data["fallback_category"],
            category_colors=tuple(data["category_colors"]),
            dialect_indicators={
                dialect: tuple(fold(str(k)) for k in keywords)
                for dialect, keywords in data["dialect_indicators"].items()
            },
            noise_signatures={
                dialect: tuple(re.compile(p, re.IGNORECASE) for p in patterns)
                for dialect, patterns in data["noise_signatures"].items()
            },
            expense_keywords=tuple(fold(str(k)) for k in data["expense_keywords"]),
            column_synonyms={
                column: tuple(str(s).lower() for s in synonyms)
                for column, synonyms in data["column_synonyms"].items()
            },
            income_categories=tuple(data.get("income_categories", ()))
        )


# Global tables instance
_tables: Optional[KeywordTables] = None


def get_keyword_tables() -> KeywordTables:
    """Get or create the process-wide keyword tables."""
    global _tables
    if _tables is None:
        _tables = KeywordTables.load()
    return _tables
