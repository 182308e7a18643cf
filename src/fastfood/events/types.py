"""Event type constants.

Learn: Centralizing event types as constants prevents typos and
makes it easy to discover every event the frontend can receive.
These strings go on the wire as the "type" field of each frame.
"""

# ─── Catalog ─────────────────────────────────────────────

MENU_UPDATE = "MENU_UPDATE"  # no payload — clients refetch the catalog

# ─── Orders ──────────────────────────────────────────────

NEW_ORDER = "NEW_ORDER"  # {"order": ...} → all admins
ORDER_STATUS_UPDATE = "ORDER_STATUS_UPDATE"  # {"order": ...} → owning user

# ─── Settings ────────────────────────────────────────────

SETTINGS_UPDATED = "SETTINGS_UPDATED"  # {"settings": ...} → everyone
