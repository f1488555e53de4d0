"""Exceptions shared by the drawing engine and its drivers."""


class ConfigError(ValueError):
    """Raised when a canvas, colour wheel or driver is configured with invalid values.

    Always raised before any state is built, so a failed construction never
    leaves a half-initialised object behind.
    """

    pass
