from __future__ import annotations

import json
import math
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


ComponentType = Literal[
    "CPU",
    "GPU",
    "RAM",
    "Motherboard",
    "Storage",
    "PSU",
    "Case",
    "Cooler",
]

# Engine iteration order.
COMPONENT_TYPES: tuple[ComponentType, ...] = (
    "CPU",
    "GPU",
    "RAM",
    "Motherboard",
    "Storage",
    "PSU",
    "Case",
    "Cooler",
)

PlatformFilter = Literal["all", "intel", "amd"]
GpuVendorFilter = Literal["all", "nvidia", "amd"]
MonitorPreset = Literal["all", "gaming", "professional", "budget"]
Marketplace = Literal["shopee", "tokopedia", "lazada"]


def to_price(value) -> float:
    """Normalize a price that may arrive as a string-encoded decimal.

    Infinity and NaN are rejected whatever their spelling ("Infinity", "NaN", 1e400).
    """
    if isinstance(value, bool):
        raise ValueError("price must be numeric")
    try:
        if isinstance(value, (int, float)):
            result = float(value)
        else:
            result = float(Decimal(str(value).strip()))
    except (InvalidOperation, ValueError, OverflowError) as err:
        raise ValueError(f"price is not a number: {value!r}") from err
    if not math.isfinite(result):
        raise ValueError(f"price must be a finite number: {value!r}")
    return result


def _parse_links(value):
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return json.loads(value)
    return value


class MarketplaceLinks(BaseModel):
    shopee: Optional[str] = None
    tokopedia: Optional[str] = None
    lazada: Optional[str] = None


class Component(BaseModel):
    """Catalog item as read from the store."""

    id: int
    name: str
    type: ComponentType
    price: float
    image_url: str = ""
    specs: str = ""
    description: str = ""
    marketplace_link: Optional[str] = None
    marketplace_links: Optional[MarketplaceLinks] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("price", mode="before")
    @classmethod
    def _normalize_price(cls, value):
        return to_price(value)

    @field_validator("price")
    @classmethod
    def _positive_price(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("price must be greater than 0")
        return value

    @field_validator("image_url", "specs", "description", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("marketplace_links", mode="before")
    @classmethod
    def _decode_links(cls, value):
        return _parse_links(value)


class ComponentIn(BaseModel):
    """Admin create/update payload."""

    name: str = Field(min_length=2)
    type: ComponentType
    price: float = Field(ge=1000)
    image_url: str
    specs: str = ""
    description: str = ""
    marketplace_link: Optional[str] = None
    marketplace_links: Optional[MarketplaceLinks] = None

    @field_validator("price", mode="before")
    @classmethod
    def _normalize_price(cls, value):
        return to_price(value)

    @field_validator("image_url")
    @classmethod
    def _image_url_is_http(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("image_url must be an http(s) URL")
        return value

    @field_validator("marketplace_link")
    @classmethod
    def _marketplace_link_is_http(cls, value: Optional[str]) -> Optional[str]:
        if value and not value.startswith(("http://", "https://")):
            raise ValueError("marketplace_link must be an http(s) URL")
        return value or None


class Monitor(BaseModel):
    id: int
    title: str
    description: str = ""
    resolution: str = ""
    refresh_rate: int = 0
    panel_type: str = ""
    screen_size: float = 0
    price: float
    rating: float = 0
    featured: bool = False
    image_url: str = ""
    marketplace_links: Optional[MarketplaceLinks] = None

    @field_validator("price", "screen_size", "rating", mode="before")
    @classmethod
    def _normalize_decimal(cls, value):
        return to_price(value) if value is not None else 0

    @field_validator("description", "resolution", "panel_type", "image_url", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("refresh_rate", mode="before")
    @classmethod
    def _none_as_zero(cls, value):
        return 0 if value is None else value

    @field_validator("marketplace_links", mode="before")
    @classmethod
    def _decode_links(cls, value):
        return _parse_links(value)


def build_key(component_type: ComponentType) -> str:
    return component_type.lower()


class Build(BaseModel):
    """Recommendation result, one optional component per category."""

    cpu: Optional[Component] = None
    gpu: Optional[Component] = None
    ram: Optional[Component] = None
    motherboard: Optional[Component] = None
    storage: Optional[Component] = None
    psu: Optional[Component] = None
    case: Optional[Component] = None
    cooler: Optional[Component] = None
    total_price: float = 0

    def get(self, component_type: ComponentType) -> Optional[Component]:
        return getattr(self, build_key(component_type))

    def parts(self) -> Dict[ComponentType, Component]:
        """Selected components keyed by type, absent categories skipped."""
        selected: Dict[ComponentType, Component] = {}
        for component_type in COMPONENT_TYPES:
            part = self.get(component_type)
            if part is not None:
                selected[component_type] = part
        return selected


class RecommendRequest(BaseModel):
    budget: float = Field(gt=0, allow_inf_nan=False)
    platform: PlatformFilter = "all"
    gpu_vendor: GpuVendorFilter = "all"


class RecommendResponse(BaseModel):
    build: Build
    allocation: Dict[str, float]
    catalog_error: Optional[str] = None


class CompatibilityRequest(BaseModel):
    cpu_id: Optional[int] = None
    motherboard_id: Optional[int] = None


class CompatibilityResponse(BaseModel):
    issues: List[str] = Field(default_factory=list)


class ManualBuildRequest(BaseModel):
    selection: Dict[ComponentType, Optional[int]] = Field(default_factory=dict)


class ManualBuildResponse(BaseModel):
    selection: Dict[ComponentType, Optional[Component]]
    total_price: float
    issues: List[str] = Field(default_factory=list)
