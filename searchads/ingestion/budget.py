"""SEARCHADS — Budget Loader (stub).

The interface is fixed so the engine can call it at startup; loading budget
data into the stores is not implemented yet.
"""

from searchads.models.report_models import BudgetLoadReport
from searchads.core.logging import get_logger

logger = get_logger("ingestion.budget")


def load_budget(source: str) -> BudgetLoadReport:
    """Load campaign budgets from source. Currently loads nothing."""
    if source:
        logger.warning(f"Budget loading not implemented, ignoring {source}")
    return BudgetLoadReport(source=source)
