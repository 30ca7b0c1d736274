"""Normalizes AgentQL ``query-data`` payloads into QueryDetail records.

The upstream does not guarantee a shape for ``product_details``: a page with a
single product comes back as an object, a page with several as a list, and a
page the extractor could not read as ``null`` or nothing at all. The payload is
decoded into :data:`ProductDetails` first, then every variant is mapped the same
way. Supplier, attribute and sample-price blocks always come from the top level
of ``data`` and are shared by every product on the page.
"""

from __future__ import annotations

import logging
from typing import Any

from src.api.schemas import PriceTier, QueryDetail

from .models import Absent, Many, ProductDetails, Single

logger = logging.getLogger(__name__)


def strip_query(url: str | None) -> str:
    """Drop everything from the first ``?`` onwards."""
    if not url:
        return ""
    return str(url).split("?", 1)[0]


def decode_product_details(raw: Any) -> ProductDetails:
    """Tag the raw ``product_details`` value with its shape."""
    if isinstance(raw, list):
        return Many(products=raw)
    if isinstance(raw, dict):
        return Single(product=raw)
    if raw is None:
        return Absent()
    return Absent(reason=type(raw).__name__)


def _price_tiers(raw: Any) -> list[PriceTier]:
    if not isinstance(raw, list):
        return []
    return [PriceTier(**entry) for entry in raw if isinstance(entry, dict)]


def _images(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [img for img in raw if isinstance(img, str)]


def _to_query_detail(product: Any, shared: dict[str, Any]) -> QueryDetail:
    if not isinstance(product, dict):
        product = {}
    return QueryDetail(
        product_name=str(product.get("product_name") or ""),
        product_url=strip_query(product.get("product_url")),
        prices=_price_tiers(product.get("prices")),
        images=_images(product.get("images")),
        **shared,
    )


def _shared_fields(data: dict[str, Any]) -> dict[str, Any]:
    supplier_information = data.get("supplier_information") or []
    if isinstance(supplier_information, dict):
        supplier_information = [supplier_information]
    elif not isinstance(supplier_information, list):
        supplier_information = []

    product_attributes = data.get("product_attributes") or {}
    if not isinstance(product_attributes, dict):
        product_attributes = {}

    return {
        "supplier_information": supplier_information,
        "product_attributes": product_attributes,
        "sample_price": data.get("Sample_price") or None,
    }


def normalize(data: dict[str, Any], url: str) -> list[QueryDetail]:
    """Map the ``data`` object of a successful upstream call to QueryDetail records.

    Never raises on a malformed payload: unknown shapes produce an empty list
    and a warning.
    """
    details = decode_product_details(data.get("product_details"))
    shared = _shared_fields(data)

    if isinstance(details, Many):
        query_details = [_to_query_detail(p, shared) for p in details.products]
    elif isinstance(details, Single):
        query_details = [_to_query_detail(details.product, shared)]
    else:
        logger.warning(
            "unexpected product_details format",
            extra={"url": url, "shape": details.reason},
        )
        query_details = []

    _log_supplier(query_details, url)
    return query_details


def _log_supplier(query_details: list[QueryDetail], url: str) -> None:
    suppliers = query_details[0].supplier_information if query_details else []
    first = suppliers[0] if suppliers else None
    if isinstance(first, dict) and first.get("name"):
        logger.debug("supplier found", extra={"url": url, "supplier": first["name"]})
    else:
        logger.debug("supplier information unavailable", extra={"url": url})
