"""
Closed enumerations for the drug lifecycle.
"""
from enum import Enum


class AssetStatus(str, Enum):
    IN_PRODUCTION = "InProduction"
    IN_TRANSIT = "InTransit"
    DELIVERED = "Delivered"
    RECALLED = "Recalled"


class HistoryEvent(str, Enum):
    REGISTERED = "Registered"
    SHIPPED = "Shipped"
    RECEIVED = "Received"
    RECALLED = "Recalled"
