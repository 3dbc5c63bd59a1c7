"""Library/playlist reconciliation."""

from beatshelf.core.engine.reconciliation import EngineSummary, ReconciliationEngine

__all__ = ["EngineSummary", "ReconciliationEngine"]
