"""Application settings loader from YAML configuration."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from ..utils.exceptions import ConfigError

SETTINGS_ENV = "STATEMENT_ANALYZER_SETTINGS"
DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"


@dataclass(frozen=True)
class CategoryAlertRule:
    """Spending alert for one category."""
    category: str
    threshold_percent: float
    savings_share: float
    priority: str
    title: str
    advice: str


@dataclass(frozen=True)
class AppSettings:
    """Application-wide settings loaded from settings.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_dir: Optional[str]
    log_max_file_size_mb: int
    log_backup_count: int

    # Parsing
    min_line_length: Dict[str, int]
    reference_year: Optional[int]
    unmatched_sample_limit: int

    # Recommendations
    savings_target_percent: float
    max_recommendations: int
    high_transaction_count: int
    top_categories: int
    category_alerts: List[CategoryAlertRule] = field(default_factory=list)

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            env_path = os.getenv(SETTINGS_ENV)
            config_path = Path(env_path) if env_path else DEFAULT_SETTINGS_PATH

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}")

        try:
            return cls.from_dict(config)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid settings in {config_path}: {e}")

    @classmethod
    def from_dict(cls, config: dict) -> "AppSettings":
        """Build settings from an already parsed mapping."""
        parsing = config["parsing"]
        recommendations = config["recommendations"]
        reference_year = parsing.get("reference_year")

        return cls(
            app_name=config["app"]["name"],
            app_version=str(config["app"]["version"]),
            log_level=config["logging"]["level"],
            log_dir=config["logging"].get("dir"),
            log_max_file_size_mb=int(config["logging"]["max_file_size_mb"]),
            log_backup_count=int(config["logging"]["backup_count"]),
            min_line_length={k: int(v) for k, v in parsing["min_line_length"].items()},
            reference_year=int(reference_year) if reference_year is not None else None,
            unmatched_sample_limit=int(parsing["unmatched_sample_limit"]),
            savings_target_percent=float(recommendations["savings_target_percent"]),
            max_recommendations=int(recommendations["max_recommendations"]),
            high_transaction_count=int(recommendations["high_transaction_count"]),
            top_categories=int(recommendations["top_categories"]),
            category_alerts=[
                CategoryAlertRule(
                    category=rule["category"],
                    threshold_percent=float(rule["threshold_percent"]),
                    savings_share=float(rule["savings_share"]),
                    priority=rule["priority"],
                    title=rule["title"],
                    advice=rule["advice"]
                )
                for rule in recommendations.get("category_alerts", [])
            ]
        )


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
