"""Request/response Pydantic models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScrapeRequest(BaseModel):
    urls: list[str]

    @field_validator("urls")
    @classmethod
    def _non_empty(cls, urls: list[str]) -> list[str]:
        if not urls:
            raise ValueError("at least one URL is required")
        return urls


class PriceTier(BaseModel):
    model_config = ConfigDict(extra="allow")

    price: Any = None
    quantity_range: Any = None


class QueryDetail(BaseModel):
    product_name: str = ""
    product_url: str = ""
    prices: list[PriceTier] = []
    images: list[str] = []
    supplier_information: list[Any] = []
    product_attributes: dict[str, Any] = {}
    sample_price: Any = None


class ScrapeResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    query_details: list[QueryDetail] = Field(default=[], alias="queryDetails")


class ErrorResponse(BaseModel):
    error: str
