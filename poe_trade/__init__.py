"""Path of Exile trade API client."""

__version__ = "0.1.0"

__all__ = [
    "CurrencyItem",
    "League",
    "ListingResult",
    "QueryResult",
    "RegularItem",
    "TradeService",
    "dispose",
    "init",
]

from .models import CurrencyItem, League, ListingResult, QueryResult, RegularItem
from .service import TradeService, dispose, init
