"""SEARCHADS — Search Ads Engine Lifecycle.

An engine is built explicitly by its owner, initialized once (ingestion then
budget loading), serves queries, and is shut down. `get_instance` keeps the
older process-wide singleton entry point on top of it.
"""

import threading
from enum import Enum
from typing import List, Optional

from searchads.engine.query_engine import QueryEngine
from searchads.ingestion.budget import load_budget
from searchads.ingestion.pipeline import ingest
from searchads.ingestion.record_source import load_records
from searchads.models.ad_models import Advertisement
from searchads.models.report_models import BudgetLoadReport, IngestionReport
from searchads.stores.base import InvertedIndexStore, RelationalStore
from searchads.core.logging import get_logger

logger = get_logger("engine.search")


class EngineState(str, Enum):
    """Where an engine is in its lifecycle."""

    NEW = "new"
    READY = "ready"
    FAILED = "failed"  # Initialization raised; serves whatever was loaded
    SHUT_DOWN = "shut_down"


SERVING_STATES = {EngineState.READY, EngineState.FAILED}


class SearchAdsEngine:
    """Owns the stores, runs ingestion once, and answers keyword queries."""

    def __init__(
        self,
        relational_store: RelationalStore,
        index_store: InvertedIndexStore,
        ads_data_path: str,
        budget_data_path: str = "",
        dedupe_results: bool = False,
    ):
        self.relational_store = relational_store
        self.index_store = index_store
        self.ads_data_path = ads_data_path
        self.budget_data_path = budget_data_path
        self.query_engine = QueryEngine(relational_store, index_store, dedupe=dedupe_results)
        self.state = EngineState.NEW
        self.report: Optional[IngestionReport] = None
        self.budget_report: Optional[BudgetLoadReport] = None
        self.init_error: Optional[str] = None
        self._initialized = False
        self._lock = threading.Lock()

    def init(self) -> Optional[IngestionReport]:
        """Load ads and budget, at most once and never after shutdown.

        Errors are logged and leave the engine in the FAILED state rather
        than propagating.
        """
        with self._lock:
            if self._initialized or self.state == EngineState.SHUT_DOWN:
                return self.report
            self._initialized = True
            try:
                self.report = ingest(
                    load_records(self.ads_data_path),
                    self.relational_store,
                    self.index_store,
                )
                self.budget_report = load_budget(self.budget_data_path)
                self.state = EngineState.READY
                logger.info("SearchAdsEngine successfully initialized.")
            except Exception as e:
                self.state = EngineState.FAILED
                self.init_error = str(e)
                logger.error("SearchAdsEngine fails to be initialized.", exc_info=True)
            return self.report

    def select_ads(self, query: str) -> List[Advertisement]:
        """Ads matching any keyword of query. Empty when not serving."""
        if self.state not in SERVING_STATES:
            logger.warning(
                f"Query received while engine is {self.state.value}",
                extra={"query": query},
            )
            return []
        return self.query_engine.select_ads(query)

    def shutdown(self) -> None:
        self.state = EngineState.SHUT_DOWN
        logger.info("SearchAdsEngine shut down")


# ── Process-wide instance ──

_instance: Optional[SearchAdsEngine] = None
_instance_lock = threading.Lock()


def get_instance(
    relational_store: RelationalStore,
    index_store: InvertedIndexStore,
    ads_data_path: str,
    budget_data_path: str = "",
) -> SearchAdsEngine:
    """Return the shared engine, building and initializing it on first call.

    Arguments are ignored once the instance exists.
    """
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                engine = SearchAdsEngine(
                    relational_store, index_store, ads_data_path, budget_data_path
                )
                engine.init()
                _instance = engine
    return _instance
