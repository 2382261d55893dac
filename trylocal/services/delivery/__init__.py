from .zones import (
    GRESHAM_ZIP_CODES,
    DEFAULT_DELIVERY_ZONES,
    DeliveryZone,
    DeliveryInfo,
    is_delivery_available,
    get_delivery_info,
)

__all__ = [
    'GRESHAM_ZIP_CODES',
    'DEFAULT_DELIVERY_ZONES',
    'DeliveryZone',
    'DeliveryInfo',
    'is_delivery_available',
    'get_delivery_info',
]
