from enum import Enum
from typing import Literal

from pydantic import BaseModel


class ListingContext(str, Enum):
    PERSONAL = "personal"
    BUSINESS = "business"


class Cta(BaseModel):
    label: str
    to: str


class ServiceCard(BaseModel):
    title: str
    subtitle: str
    description: str = ""
    bullets: list[str] = []
    image: str | None = None
    cta_primary: Cta
    cta_secondary: Cta | None = None


class CategoryGroup(BaseModel):
    id: str
    name: str
    description: str
    items: list[ServiceCard]


class DynamicCatalog(BaseModel):
    kind: Literal["dynamic"] = "dynamic"
    cards: list[ServiceCard]


class StaticCatalog(BaseModel):
    kind: Literal["static"] = "static"
    cards: list[ServiceCard]


ServiceListing = DynamicCatalog | StaticCatalog
