"""Configuration module."""
from .settings import AppSettings, CategoryAlertRule, get_settings
from .keywords import KeywordTables, fold, get_keyword_tables

__all__ = [
    "AppSettings",
    "CategoryAlertRule",
    "get_settings",
    "KeywordTables",
    "fold",
    "get_keyword_tables"
]
