"""fastfood — order-management backend for a single restaurant.

Menu catalog, accounts, order placement and real-time order-status
notifications pushed over WebSockets.
"""

__version__ = "0.1.0"
