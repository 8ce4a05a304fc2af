"""SEARCHADS — Query Engine.

Resolves a free-text query:
  tokenize → keyword index lookups → concatenate ids → fetch full ads

Ids are concatenated across tokens in token order, so an ad matched by two
keywords comes back twice unless `dedupe` is set. Failures on one token or
one id drop only that part of the result; the call never raises.
"""

import time
from typing import List

from searchads.core.tokenizer import tokenize
from searchads.models.ad_models import Advertisement
from searchads.stores.base import (
    AdConnection,
    IndexConnection,
    InvertedIndexStore,
    RelationalStore,
    StoreError,
    StoreUnavailable,
)
from searchads.core.logging import get_logger

logger = get_logger("engine.query")


class QueryEngine:
    """Read-only keyword search over the two stores."""

    def __init__(
        self,
        relational_store: RelationalStore,
        index_store: InvertedIndexStore,
        dedupe: bool = False,
    ):
        self.relational_store = relational_store
        self.index_store = index_store
        self.dedupe = dedupe

    def select_ads(self, query: str) -> List[Advertisement]:
        """Return ads whose title shares a keyword with the query, in match order."""
        tokens = tokenize(query)
        if not tokens:
            return []

        started = time.perf_counter()
        try:
            with self.index_store.connect() as index, self.relational_store.connect() as ads:
                ad_ids = self._resolve_ids(index, tokens)
                results = self._fetch_ads(ads, ad_ids, query)
        except StoreUnavailable as e:
            logger.error(f"Store unavailable when selecting ads: {e}", extra={"query": query})
            return []

        logger.info(
            f"Selected {len(results)} ads for {len(tokens)} keywords",
            extra={
                "query": query,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )
        return results

    def _resolve_ids(self, index: IndexConnection, tokens: List[str]) -> List[str]:
        ad_ids: List[str] = []
        for token in tokens:
            try:
                ad_ids.extend(index.get(token))
            except StoreError as e:
                logger.error(f"Index lookup failed: {e}", extra={"keyword": token})
        if self.dedupe:
            ad_ids = list(dict.fromkeys(ad_ids))
        return ad_ids

    def _fetch_ads(
        self, ads: AdConnection, ad_ids: List[str], query: str
    ) -> List[Advertisement]:
        results: List[Advertisement] = []
        for raw_id in ad_ids:
            try:
                ad_id = int(raw_id)
            except (TypeError, ValueError):
                logger.error(f"Malformed ad id '{raw_id}' in index", extra={"query": query})
                continue
            try:
                ad = ads.get_by_id(ad_id)
            except StoreError as e:
                logger.error(f"Ad lookup failed: {e}", extra={"ad_id": ad_id})
                continue
            if ad is None:
                logger.debug(f"Ad {ad_id} indexed but not found", extra={"ad_id": ad_id})
                continue
            results.append(ad)
        return results
