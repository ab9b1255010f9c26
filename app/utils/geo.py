# app/utils/geo.py
"""
Park geofence helpers.
Distances use the haversine formula on a spherical Earth (R = 6371 km).
"""

import math
from typing import Optional
from app.config import settings

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def is_in_park(lat: float, lng: float) -> bool:
    distance = haversine_km(lat, lng, settings.PARK_CENTER_LAT, settings.PARK_CENTER_LNG)
    return distance <= settings.PARK_RADIUS_KM


def closest_parking_lot(lat: float, lng: float, lots: Optional[dict] = None) -> Optional[str]:
    """lot_id of the nearest configured lot, or None when no lots are configured."""
    lots = settings.PARKING_LOTS if lots is None else lots
    if not lots:
        return None
    return min(lots, key=lambda lot_id: haversine_km(lat, lng, lots[lot_id]["lat"], lots[lot_id]["lng"]))
