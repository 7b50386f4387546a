"""Error types raised by the spatial tiler."""

UNABLE_TO_DECODE_MSG = "Unable to decode shape: "
MODEL_DOES_NOT_SUPPORT_SHAPE_MSG = "Spherical model does not support shape: "


class GeoError(ValueError):
    """Base class for all spatial tiler errors."""


class ParseError(GeoError):
    """
    The text matched neither supported encoding, or decoded to an empty shape.

    :param text: The original input text.
    :param reason: Why the last encoding attempt failed.
    """

    def __init__(self, text: str | None, reason: str | None = None) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"{UNABLE_TO_DECODE_MSG}{text}")


class UnsupportedShapeError(GeoError):
    """
    The text was parsed, but the active geometry model rejects the shape type.

    :param text: The original input text.
    :param reason: Which shape type was rejected.
    """

    def __init__(self, text: str, reason: str | None = None) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"{MODEL_DOES_NOT_SUPPORT_SHAPE_MSG}{text}")


class ValidationError(GeoError):
    """A numeric parameter is outside its documented range."""
