"""Errors raised while building domain records."""


class InvalidRecordError(ValueError):
    """A persisted row cannot be represented as a valid domain record."""


__all__ = ["InvalidRecordError"]
