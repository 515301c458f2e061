"""Geohash codec: lat/lng <-> base-32 hierarchical cell strings.

Each character carries 5 bits, alternating longitude and latitude bits
(longitude first). Longer hashes name smaller cells nested inside the
shorter ones, so a hash always starts with every lower-precision hash of
the same point. At precision 7 a cell is about 153 m x 153 m at the
equator: good enough as an index key for coarse pre-filtering, never a
substitute for a containment test.

Pure float API with no contract imports, so the codec stays a leaf.
"""

from __future__ import annotations

from dataclasses import dataclass

from bopeep.errors import InvalidGeohashError

BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
_DECODE_MAP = {char: index for index, char in enumerate(BASE32)}
BITS_PER_CHAR = 5
DEFAULT_PRECISION = 7


@dataclass(frozen=True)
class GeohashCell:
    """Decoded cell: centre plus half-height/half-width in degrees."""

    lat: float
    lng: float
    lat_err: float
    lng_err: float

    @property
    def min_lat(self) -> float:
        return self.lat - self.lat_err

    @property
    def max_lat(self) -> float:
        return self.lat + self.lat_err

    @property
    def min_lng(self) -> float:
        return self.lng - self.lng_err

    @property
    def max_lng(self) -> float:
        return self.lng + self.lng_err


def encode(lat: float, lng: float, precision: int = DEFAULT_PRECISION) -> str:
    """Encode a latitude/longitude pair into a geohash of ``precision`` chars."""
    if precision <= 0:
        raise InvalidGeohashError("", f"precision must be positive, got {precision}")

    min_lat, max_lat = -90.0, 90.0
    min_lng, max_lng = -180.0, 180.0
    chars: list[str] = []
    ch = 0
    bit = 0
    use_lng = True

    while len(chars) < precision:
        if use_lng:
            mid = (min_lng + max_lng) / 2
            if lng >= mid:
                ch |= 1 << (BITS_PER_CHAR - 1 - bit)
                min_lng = mid
            else:
                max_lng = mid
        else:
            mid = (min_lat + max_lat) / 2
            if lat >= mid:
                ch |= 1 << (BITS_PER_CHAR - 1 - bit)
                min_lat = mid
            else:
                max_lat = mid

        use_lng = not use_lng
        if bit < BITS_PER_CHAR - 1:
            bit += 1
        else:
            chars.append(BASE32[ch])
            bit = 0
            ch = 0

    return "".join(chars)


def bounds(geohash: str) -> GeohashCell:
    """Decode a geohash into its cell (centre and extent).

    Raises ``InvalidGeohashError`` for empty input or characters outside
    the geohash alphabet. Input is case-insensitive.
    """
    if not geohash:
        raise InvalidGeohashError(geohash, "empty geohash")

    min_lat, max_lat = -90.0, 90.0
    min_lng, max_lng = -180.0, 180.0
    use_lng = True

    for char in geohash.lower():
        value = _DECODE_MAP.get(char)
        if value is None:
            raise InvalidGeohashError(geohash, f"unexpected character {char!r}")
        for shift in range(BITS_PER_CHAR - 1, -1, -1):
            bit = (value >> shift) & 1
            if use_lng:
                mid = (min_lng + max_lng) / 2
                if bit:
                    min_lng = mid
                else:
                    max_lng = mid
            else:
                mid = (min_lat + max_lat) / 2
                if bit:
                    min_lat = mid
                else:
                    max_lat = mid
            use_lng = not use_lng

    return GeohashCell(
        lat=(min_lat + max_lat) / 2,
        lng=(min_lng + max_lng) / 2,
        lat_err=(max_lat - min_lat) / 2,
        lng_err=(max_lng - min_lng) / 2,
    )


def decode(geohash: str) -> tuple[float, float]:
    """Return the ``(lat, lng)`` centre of a geohash cell."""
    cell = bounds(geohash)
    return cell.lat, cell.lng


def _wrap_lng(lng: float) -> float:
    wrapped = ((lng + 180.0) % 360.0) - 180.0
    return -180.0 if wrapped == 180.0 else wrapped


def neighbors(geohash: str) -> list[str]:
    """Return the cells surrounding ``geohash`` at the same precision.

    Eight cells in general. Longitude wraps at the antimeridian; rows that
    would cross a pole are left out, so polar cells have fewer neighbours.
    Order: south row, middle row, north row, each west to east.
    """
    cell = bounds(geohash)
    precision = len(geohash)
    lat_step = cell.lat_err * 2
    lng_step = cell.lng_err * 2
    own = geohash.lower()

    result: list[str] = []
    for d_lat in (-1, 0, 1):
        lat = cell.lat + d_lat * lat_step
        if lat < -90.0 or lat > 90.0:
            continue
        for d_lng in (-1, 0, 1):
            if d_lat == 0 and d_lng == 0:
                continue
            code = encode(lat, _wrap_lng(cell.lng + d_lng * lng_step), precision)
            if code != own and code not in result:
                result.append(code)
    return result
