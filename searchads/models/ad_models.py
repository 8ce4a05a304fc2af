"""SEARCHADS — Advertisement Models.

`Advertisement` is the immutable domain entity handed around by the engine.
`AdRecord` and `KeywordIndexEntry` are how the SQL stores persist it.
"""

from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict
from sqlmodel import SQLModel, Field

DEFAULT_PRICE = 100.0
DEFAULT_BID_PRICE = 100.0


# ─────────────────────────────────────────────
# DOMAIN MODEL
# ─────────────────────────────────────────────


class Advertisement(BaseModel):
    """One ad listing. Keywords are derived from the title at parse time."""

    model_config = ConfigDict(frozen=True)

    ad_id: int
    campaign_id: int
    title: str
    brand: str = ""
    thumbnail: str = ""
    detail_url: str = ""
    category: str = ""
    price: float = DEFAULT_PRICE
    bid_price: float = DEFAULT_BID_PRICE
    keywords: Tuple[str, ...] = ()

    def to_record(self) -> "AdRecord":
        return AdRecord(
            ad_id=self.ad_id,
            campaign_id=self.campaign_id,
            title=self.title,
            brand=self.brand,
            thumbnail=self.thumbnail,
            detail_url=self.detail_url,
            category=self.category,
            price=self.price,
            bid_price=self.bid_price,
            keywords=" ".join(self.keywords),
        )


# ─────────────────────────────────────────────
# DATABASE MODELS
# ─────────────────────────────────────────────


class AdRecord(SQLModel, table=True):
    """Full ad row, looked up by ad_id at query time."""

    __tablename__ = "ads"

    ad_id: int = Field(primary_key=True, description="Source ad identifier")
    campaign_id: int = Field(index=True)
    title: str
    brand: str = Field(default="")
    thumbnail: str = Field(default="")
    detail_url: str = Field(default="")
    category: str = Field(default="")
    price: float = Field(default=DEFAULT_PRICE)
    bid_price: float = Field(default=DEFAULT_BID_PRICE)
    keywords: str = Field(default="", description="Space-separated title keywords")

    def to_advertisement(self) -> Advertisement:
        return Advertisement(
            ad_id=self.ad_id,
            campaign_id=self.campaign_id,
            title=self.title,
            brand=self.brand,
            thumbnail=self.thumbnail,
            detail_url=self.detail_url,
            category=self.category,
            price=self.price,
            bid_price=self.bid_price,
            keywords=tuple(self.keywords.split()),
        )


class KeywordIndexEntry(SQLModel, table=True):
    """One (keyword, ad_id) insertion in the inverted index.

    Append-only. Reading by ascending id gives insertion order; the same
    pair may appear more than once.
    """

    __tablename__ = "keyword_index"

    id: Optional[int] = Field(default=None, primary_key=True)
    keyword: str = Field(index=True)
    ad_id: str = Field(description="String-encoded ad identifier")
