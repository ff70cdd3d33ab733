"""
Market-wide models

- ItemMapping: Static item metadata (Wiki /mapping row)
- CategoryIndex: Average price and change across a category of items
- AlchCost: Rune cost of one High Level Alchemy cast
"""

from pydantic import BaseModel, Field

from core.models.prices import LatestPrice


class ItemMapping(BaseModel):
    """Item metadata; alch values and buy limit are missing for some items"""

    id: int
    name: str
    examine: str | None = None
    members: bool = False
    lowalch: int | None = None
    highalch: int | None = None
    limit: int | None = Field(default=None, description="GE buy limit per 4 hours")
    value: int | None = Field(default=None, description="Store value")
    icon: str | None = None


class CategoryIndex(BaseModel):
    """
    Index over one item category (ores, herbs, logs, ...)

    Averages use only the items that currently have a quote.
    """

    category: str
    description: str
    item_ids: list[int]
    items: dict[int, LatestPrice] = Field(description="Quoted items, keyed by item id")
    average_price: int = Field(description="Mean last_price, rounded")
    average_percent_change: float | None = Field(
        default=None, description="Mean LatestPrice.percent_change, 2 decimals"
    )
    is_down: bool | None = Field(default=None, description="average_percent_change < 0")
    timestamp: int = Field(description="Computed at, milliseconds since epoch")


class AlchCost(BaseModel):
    """5 fire runes + 1 nature rune, priced at their instant-sell (low) price"""

    alch_cost: int
    fire_rune_price: int
    nature_rune_price: int
    timestamp: int = Field(description="Computed at, milliseconds since epoch")
