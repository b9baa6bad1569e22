"""Analysis orchestration module."""
from .pipeline import StatementPipeline

__all__ = ["StatementPipeline"]
