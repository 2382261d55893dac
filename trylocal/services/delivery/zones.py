from dataclasses import dataclass
from typing import List, Optional, Tuple

# ZIP codes we deliver to
GRESHAM_ZIP_CODES = [
    "97030",  # Gresham
    "97080",  # Gresham
    "97230",  # Wood Village
    "97233",  # Gresham East
    "97236",  # Gresham South
]


@dataclass(frozen=True)
class DeliveryZone:
    zip_codes: Tuple[str, ...]
    fee: float
    estimated_minutes: int


@dataclass(frozen=True)
class DeliveryInfo:
    available: bool
    fee: float = 0.0
    estimated_minutes: int = 0


DEFAULT_DELIVERY_ZONES: List[DeliveryZone] = [
    DeliveryZone(zip_codes=("97030", "97080"), fee=5.00, estimated_minutes=30),
    DeliveryZone(zip_codes=("97230", "97233", "97236"), fee=7.50, estimated_minutes=45),
]


def _normalize(zip_code: str) -> str:
    # accept ZIP+4, we only zone on the first five digits
    return (zip_code or "").strip()[:5]


def is_delivery_available(zip_code: str) -> bool:
    return _normalize(zip_code) in GRESHAM_ZIP_CODES


def find_zone(zip_code: str, zones: Optional[List[DeliveryZone]] = None) -> Optional[DeliveryZone]:
    code = _normalize(zip_code)
    for zone in zones or DEFAULT_DELIVERY_ZONES:
        if code in zone.zip_codes:
            return zone
    return None


def get_delivery_info(zip_code: str, zones: Optional[List[DeliveryZone]] = None) -> DeliveryInfo:
    """delivery fee and estimate for a ZIP code, zeros when we don't deliver there."""
    zone = find_zone(zip_code, zones)
    if zone is None:
        return DeliveryInfo(available=False)
    return DeliveryInfo(available=True, fee=zone.fee, estimated_minutes=zone.estimated_minutes)
