"""
Pydantic models for API request/response validation and documentation.
"""

from typing import List

from pydantic import BaseModel, Field

from cardmatch.models.card import RawListing


class DetectRequest(BaseModel):
    """Request model for detecting and matching a single listing."""

    title: str = Field("", description="Marketplace listing title")
    price: float = Field(0.0, description="Purchase price (not used for scoring)")

    class Config:
        json_schema_extra = {
            "example": {
                "title": "2024 Topps Mike Trout Baseball Card #27",
                "price": 4.99,
            }
        }


class BatchDetectRequest(BaseModel):
    """Request model for classifying several listings in one call."""

    listings: List[RawListing] = Field(
        ..., description="Listings processed one after another", max_length=100
    )

    class Config:
        json_schema_extra = {
            "example": {
                "listings": [
                    {"title": "2020 Panini Prizm LeBron James Auto /99", "price": 250},
                    {"title": "Nike Air Max Size 10 Shoes", "price": 80},
                ]
            }
        }
