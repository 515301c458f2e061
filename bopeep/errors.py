"""Engine-specific exceptions."""


class EngineError(Exception):
    """Base exception for all bopeep engine errors."""


class InvalidGeohashError(EngineError, ValueError):
    """Raised when a geohash string or precision is malformed."""

    def __init__(self, geohash: str, reason: str):
        self.geohash = geohash
        self.reason = reason
        super().__init__(f"Invalid geohash {geohash!r}: {reason}")
