"""
Data models for extracted car listings and extraction outcomes.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from .config import DEFAULT_CITY, DEFAULT_OWNER_NAME


class PageType(str, Enum):
    CATALOG = "CATALOG"
    DETAIL = "DETAIL"
    UNKNOWN = "UNKNOWN"


@dataclass
class Listing:
    """One normalized car record recovered from a catalog card or a detail page."""

    title: str
    model: str
    price: int
    year_of_purchase: int
    images: List[str] = field(default_factory=list)
    owner_name: str = DEFAULT_OWNER_NAME
    distance_driven: int = 0
    ownership_count: int = 1
    city: str = DEFAULT_CITY
    description: Optional[str] = None

    # Provenance
    source: str = "generic"
    url: Optional[str] = None

    # Detail-page extras
    fuel_type: Optional[str] = None
    transmission: Optional[str] = None
    body_type: Optional[str] = None
    features: List[str] = field(default_factory=list)
    specifications: Dict[str, str] = field(default_factory=dict)

    def is_complete(self) -> bool:
        return bool(self.title) and bool(self.model) and self.price > 0 and len(self.images) > 0

    def to_dict(self) -> dict:
        out = {
            "images": list(self.images),
            "title": self.title,
            "model": self.model,
            "price": self.price,
            "ownerName": self.owner_name,
            "yearOfPurchase": self.year_of_purchase,
            "distanceDriven": self.distance_driven,
            "ownershipCount": self.ownership_count,
            "city": self.city,
            "source": self.source,
        }
        if self.description is not None:
            out["description"] = self.description
        if self.url:
            out["url"] = self.url
        for key, value in (
            ("fuelType", self.fuel_type),
            ("transmission", self.transmission),
            ("bodyType", self.body_type),
        ):
            if value:
                out[key] = value
        if self.features:
            out["features"] = list(self.features)
        if self.specifications:
            out["specifications"] = dict(self.specifications)
        return out


@dataclass
class Success:
    records: List[Listing]
    count: int = 0
    message: str = ""

    ok = True

    def __post_init__(self):
        self.count = len(self.records)

    def to_dict(self) -> dict:
        return {
            "success": True,
            "count": self.count,
            "message": self.message,
            "data": [r.to_dict() for r in self.records],
        }


@dataclass
class Failure:
    reason: str
    kind: str = "error"

    ok = False

    def to_dict(self) -> dict:
        return {"success": False, "error": self.reason, "kind": self.kind}


ExtractionOutcome = Union[Success, Failure]
