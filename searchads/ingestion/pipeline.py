"""SEARCHADS — Ingestion Pipeline.

Runs the one-time bulk load:
  raw record → parse → ads store → keyword index

A bad record or a failed store write skips that record only; the batch
always runs to the end.
"""

import time
from typing import Any, Iterable

from searchads.ingestion.parser import parse_ad
from searchads.ingestion.record_source import SourceRecord
from searchads.models.report_models import IngestionReport, ParseFailure, RecordFailure
from searchads.stores.base import (
    InvertedIndexStore,
    RelationalStore,
    StoreError,
    StoreUnavailable,
)
from searchads.core.logging import get_logger

logger = get_logger("ingestion.pipeline")


def ingest(
    records: Iterable[Any],
    relational_store: RelationalStore,
    index_store: InvertedIndexStore,
) -> IngestionReport:
    """Load records into both stores, in source order.

    Records are raw JSON lines, decoded objects, or SourceRecords read from
    a file. Each record is inserted into the ads store, then indexed under
    every keyword of its title. Returns counts of accepted and skipped records.
    """
    started = time.perf_counter()
    report = IngestionReport()

    try:
        with relational_store.connect() as ads, index_store.connect() as index:
            for index_in_batch, record in enumerate(records):
                # File records carry their line number; plain records their batch position
                if isinstance(record, SourceRecord):
                    position, raw = record
                else:
                    position, raw = index_in_batch, record
                parsed = parse_ad(raw, position)
                if isinstance(parsed, ParseFailure):
                    report.skipped += 1
                    report.failures.append(
                        RecordFailure(
                            record_index=position,
                            stage="parse",
                            reason=(
                                f"{parsed.field} {parsed.reason}"
                                if parsed.field
                                else parsed.reason
                            ),
                        )
                    )
                    continue

                try:
                    ads.insert(parsed)
                    for keyword in parsed.keywords:
                        index.put(keyword, parsed.ad_id)
                except StoreError as e:
                    logger.warning(
                        f"Store write failed for record {position}: {e}",
                        extra={"record_index": position, "ad_id": parsed.ad_id},
                    )
                    report.skipped += 1
                    report.failures.append(
                        RecordFailure(
                            record_index=position,
                            ad_id=parsed.ad_id,
                            stage="store",
                            reason=str(e),
                        )
                    )
                    continue

                report.accepted += 1
    except StoreUnavailable as e:
        logger.error(f"Ingestion skipped, store unavailable: {e}")
        report.store_unavailable = True

    report.duration_ms = round((time.perf_counter() - started) * 1000, 2)
    logger.info(
        f"Ingestion complete: {report.accepted} accepted, {report.skipped} skipped",
        extra={"duration_ms": report.duration_ms},
    )
    return report
