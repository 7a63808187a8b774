"""Wire models for the trade API."""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class TradeModel(BaseModel):
    """Base model using the API's camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialise for a request body, dropping unset (None) fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# Reference data


class League(TradeModel):
    id: str
    text: str = ""


class StaticEntry(TradeModel):
    id: str
    text: str = ""
    image: Optional[str] = None


class StaticItemCategory(TradeModel):
    id: str
    label: Optional[str] = None
    entries: list[StaticEntry] = Field(default_factory=list)


class Attribute(TradeModel):
    id: str
    text: str = ""
    type: Optional[str] = None


class AttributeCategory(TradeModel):
    label: str
    entries: list[Attribute] = Field(default_factory=list)


class ItemCategoryEntry(TradeModel):
    name: Optional[str] = None
    type: str
    text: Optional[str] = None


class ItemCategory(TradeModel):
    label: str
    entries: list[ItemCategoryEntry] = Field(default_factory=list)


# Items


class Rarity(str, Enum):
    """Item rarity as understood by the search filters."""

    NORMAL = "normal"
    MAGIC = "magic"
    RARE = "rare"
    UNIQUE = "unique"


class Item(TradeModel):
    """An item description parsed from the game client."""

    name: str
    type: Optional[str] = None


class RegularItem(Item):
    """Equipment-like item, priced through the search protocol."""

    kind: Literal["regular"] = "regular"
    rarity: Rarity = Rarity.UNIQUE
    corrupted: Optional[bool] = None


class CurrencyItem(Item):
    """Fungible item, priced through the bulk exchange protocol."""

    kind: Literal["currency"] = "currency"


# Results


class ListingResult(TradeModel):
    """A single offer returned by the fetch endpoint."""

    model_config = ConfigDict(extra="allow")

    id: str
    listing: dict[str, Any] = Field(default_factory=dict)
    item: dict[str, Any] = Field(default_factory=dict)


class QueryResult(TradeModel, Generic[T]):
    """Envelope shared by every trade API response.

    ``result`` holds listing ids after a search or exchange query, full
    :class:`ListingResult` records after a fetch, and the records
    themselves for reference data. ``total`` is what the server reports
    and can exceed ``len(result)``.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    result: list[T]
    total: int = 0
    item: Optional[Item] = None
    uri: Optional[str] = None


# Request bodies


class StatusOption(str, Enum):
    ONLINE = "online"
    ANY = "any"


class Status(TradeModel):
    option: StatusOption = StatusOption.ONLINE


class OptionFilter(TradeModel):
    option: Any


class TypeFilterSet(TradeModel):
    rarity: Optional[OptionFilter] = None


class TypeFilters(TradeModel):
    filters: TypeFilterSet = Field(default_factory=TypeFilterSet)


class MiscFilterSet(TradeModel):
    corrupted: Optional[OptionFilter] = None


class MiscFilters(TradeModel):
    filters: MiscFilterSet = Field(default_factory=MiscFilterSet)


class SearchFilters(TradeModel):
    type_filters: Optional[TypeFilters] = None
    misc_filters: Optional[MiscFilters] = None


class SearchQuery(TradeModel):
    status: Status = Field(default_factory=Status)
    name: Optional[str] = None
    type: Optional[str] = None
    filters: Optional[SearchFilters] = None


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Sort(TradeModel):
    price: SortOrder = SortOrder.ASC


class QueryRequest(TradeModel):
    """Body for ``POST search/<league>``."""

    query: SearchQuery
    sort: Sort = Field(default_factory=Sort)


class Exchange(TradeModel):
    status: Status = Field(default_factory=Status)
    want: list[str] = Field(default_factory=list)
    have: list[str] = Field(default_factory=list)


class BulkQueryRequest(TradeModel):
    """Body for ``POST exchange/<league>``."""

    exchange: Exchange
