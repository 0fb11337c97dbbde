"""Data models for inventory API payloads."""

from pyrfid.models._base import RfidBaseModel, RfidEnum, RfidRequestModel
from pyrfid.models.alert import Alert
from pyrfid.models.enums import AlertType, Location, RfidEventType
from pyrfid.models.product import Product, ProductRegisterRequest, ProductWithStock, RfidWsMessage
from pyrfid.models.rfid import DashboardStats, RfidEventWithProduct
from pyrfid.models.sales import MultipleSaleRequest, SaleItem, SaleRequest
from pyrfid.models.shelf import Shelf, ShelfRequest
from pyrfid.models.store_stock import StoreStock, StoreStockWithDetails

__all__ = [
    "Alert",
    "AlertType",
    "DashboardStats",
    "Location",
    "MultipleSaleRequest",
    "Product",
    "ProductRegisterRequest",
    "ProductWithStock",
    "RfidBaseModel",
    "RfidEnum",
    "RfidEventType",
    "RfidEventWithProduct",
    "RfidRequestModel",
    "RfidWsMessage",
    "SaleItem",
    "SaleRequest",
    "Shelf",
    "ShelfRequest",
    "StoreStock",
    "StoreStockWithDetails",
]
