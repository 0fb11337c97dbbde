"""User-facing message templates.

Pass a custom :class:`Messages` to :class:`~pyrfid.state.dashboard.Dashboard`
to localize the console.
"""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class Messages:
    refill_shelf: str = "refill shelf {shelf_name}"
    new_alert: str = "new alert: {alert_type}"

    product_registered: str = "product registered"
    product_updated: str = "product updated"
    product_deleted: str = "product deleted"
    product_register_failed: str = "error while registering the product"
    product_update_failed: str = "error while updating the product"
    product_delete_failed: str = "error while deleting the product"
    confirm_delete_product: str = 'Delete product "{name}"?'

    event_delete_failed: str = "error while deleting the event"
    confirm_delete_event: str = "Delete this event?"

    shelf_created: str = "shelf created"
    shelf_updated: str = "shelf updated"
    shelf_deleted: str = "shelf deleted"
    shelf_create_failed: str = "error while creating the shelf"
    shelf_update_failed: str = "error while updating the shelf"
    shelf_delete_failed: str = "error while deleting the shelf"
    confirm_delete_shelf: str = 'Delete shelf "{name}"?'

    alert_resolved: str = "alert resolved"
    alert_resolve_failed: str = "error while resolving the alert"
    confirm_resolve_alert: str = 'Mark the alert for "{shelf_name}" as resolved?'

    barcode_required: str = "enter a barcode"
    product_not_found: str = "product not found or not available in store"
    search_first: str = "search for a product first"
    quantity_too_low: str = "quantity must be at least 1"
    insufficient_stock: str = "insufficient stock (available: {available})"
    insufficient_stock_for: str = "insufficient stock for {name} (available: {available})"
    added_to_cart: str = "{name} added to cart"
    empty_cart: str = "the cart is empty, add products first"
    sale_recorded: str = "sale recorded: {items} item(s) across {products} product(s)"
    sale_failed: str = "error while recording the sale"
