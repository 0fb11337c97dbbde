"""pyrfid - Async Python client for an RFID inventory backend."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyrfid")
except PackageNotFoundError:
    __version__ = "0+local"
from pyrfid.client import RfidClient
from pyrfid.config import RfidConfig
from pyrfid.exceptions import (
    EmptyCartError,
    InsufficientStockError,
    RfidApiError,
    RfidBusinessRuleError,
    RfidConfigError,
    RfidError,
    RfidTransportError,
)
from pyrfid.models import (
    Alert,
    AlertType,
    DashboardStats,
    Location,
    MultipleSaleRequest,
    Product,
    ProductRegisterRequest,
    ProductWithStock,
    RfidEventType,
    RfidEventWithProduct,
    RfidWsMessage,
    SaleItem,
    SaleRequest,
    Shelf,
    ShelfRequest,
    StoreStockWithDetails,
)
from pyrfid.state import Dashboard, Messages, View

__all__ = [
    "__version__",
    "Alert",
    "AlertType",
    "Dashboard",
    "DashboardStats",
    "EmptyCartError",
    "InsufficientStockError",
    "Location",
    "Messages",
    "MultipleSaleRequest",
    "Product",
    "ProductRegisterRequest",
    "ProductWithStock",
    "RfidApiError",
    "RfidBusinessRuleError",
    "RfidClient",
    "RfidConfig",
    "RfidConfigError",
    "RfidError",
    "RfidEventType",
    "RfidEventWithProduct",
    "RfidTransportError",
    "RfidWsMessage",
    "SaleItem",
    "SaleRequest",
    "Shelf",
    "ShelfRequest",
    "StoreStockWithDetails",
    "View",
]
