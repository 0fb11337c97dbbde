"""Internal constants shared across the library."""

USER_AGENT = "pyrfid"

# ------------------------------------------------------------------
# Push topics
# ------------------------------------------------------------------

TOPIC_RFID = "/topic/rfid"
TOPIC_ALERTS = "/topic/alerts"
PUSH_TOPICS: tuple[str, ...] = (TOPIC_RFID, TOPIC_ALERTS)

# ------------------------------------------------------------------
# REST endpoints
# ------------------------------------------------------------------

STATS_ENDPOINT = "/api/rfid/stats"
RECENT_EVENTS_ENDPOINT = "/api/rfid/events/recent-with-product"
RFID_EVENT_ENDPOINT = "/api/rfid/{event_id}"
STORE_STOCK_ENDPOINT = "/api/store-stock"
PRODUCTS_ENDPOINT = "/api/products"
PRODUCTS_WITH_STOCK_ENDPOINT = "/api/products/with-stock"
PRODUCT_ENDPOINT = "/api/products/{product_id}"
PRODUCT_BY_BARCODE_ENDPOINT = "/api/products/barcode/{barcode}"
SHELVES_ENDPOINT = "/api/shelf"
SHELF_ENDPOINT = "/api/shelf/{shelf_id}"
OPEN_ALERTS_ENDPOINT = "/api/alerts/open"
RESOLVE_ALERT_ENDPOINT = "/api/alerts/{alert_id}/resolve"
SALES_ENDPOINT = "/api/sales"
MULTIPLE_SALES_ENDPOINT = "/api/sales/multiple"
