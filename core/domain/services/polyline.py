"""Encoded polyline decoder (precision 1e5)."""
from typing import List, Optional, Tuple

PRECISION = 1e5


def _next_value(encoded: str, index: int) -> Tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise ValueError(f"Truncated polyline at position {index}")
        chunk = ord(encoded[index]) - 63
        index += 1
        result |= (chunk & 0x1F) << shift
        shift += 5
        if chunk < 0x20:
            break
    delta = ~(result >> 1) if result & 1 else result >> 1
    return delta, index


def decode_polyline(encoded: Optional[str]) -> List[Tuple[float, float]]:
    """
    Decode an encoded route string into (lat, lon) waypoints.

    Args:
        encoded: Polyline string; None or empty yields an empty list

    Returns:
        Ordered list of (latitude, longitude) tuples

    Raises:
        ValueError: If the string ends in the middle of a value
    """
    if not encoded:
        return []

    points: List[Tuple[float, float]] = []
    index = 0
    lat = 0
    lon = 0

    while index < len(encoded):
        d_lat, index = _next_value(encoded, index)
        d_lon, index = _next_value(encoded, index)
        lat += d_lat
        lon += d_lon
        points.append((lat / PRECISION, lon / PRECISION))

    return points
