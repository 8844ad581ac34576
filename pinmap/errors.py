"""Typed exceptions for pin input and configuration problems."""


class PinmapError(Exception):
    """Base class for pinmap errors."""


class PinLoadError(PinmapError, ValueError):
    """Raised when a pin table cannot be read or lacks required columns."""


class ConfigError(PinmapError, ValueError):
    """Raised when a configuration file is unreadable or fails validation."""
