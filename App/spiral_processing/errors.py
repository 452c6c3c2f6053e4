"""Exceptions raised by the spiral rendering pipeline."""


class SpiralError(Exception):
    """Base class for all pipeline failures."""


class DecodeError(SpiralError, ValueError):
    """The source image could not be read or decoded."""


class EncodeError(SpiralError):
    """The rendered bitmap could not be finalized or encoded."""
