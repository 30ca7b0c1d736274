"""Data models for the scrape submodule."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.api.schemas import ScrapeResult


@dataclass(frozen=True)
class Single:
    """``product_details`` was a single object."""

    product: dict[str, Any]


@dataclass(frozen=True)
class Many:
    """``product_details`` was a list of objects."""

    products: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class Absent:
    """``product_details`` was missing, null or of an unsupported type."""

    reason: str = "missing"


ProductDetails = Single | Many | Absent


@dataclass(frozen=True)
class ScrapeError:
    """A URL whose upstream call did not produce usable data."""

    url: str
    reason: str
    status_code: int | None = None


ScrapeOutcome = ScrapeResult | ScrapeError
