"""SEARCHADS — Ingestion & Budget Report Schemas."""

from typing import List, Optional
from pydantic import BaseModel


class ParseFailure(BaseModel):
    """Why a raw record could not become an Advertisement."""

    record_index: int
    field: Optional[str] = None  # None → the record itself is malformed
    reason: str = "missing"


class RecordFailure(BaseModel):
    """A record skipped during ingestion."""

    record_index: int
    ad_id: Optional[int] = None
    stage: str  # "parse" | "store"
    reason: str


class IngestionReport(BaseModel):
    """Outcome of one ingestion pass."""

    accepted: int = 0
    skipped: int = 0
    failures: List[RecordFailure] = []
    store_unavailable: bool = False
    duration_ms: float = 0.0


class BudgetLoadReport(BaseModel):
    """Outcome of budget loading. Loading is not implemented yet."""

    source: str = ""
    loaded: int = 0
    implemented: bool = False
