"""Exceptions raised while assembling forests from flat records."""


class FlatTreeException(Exception):
    """Base class for all flattree errors."""


class InvalidRecordError(FlatTreeException):
    """A record reached as a parent has no identity value."""


class ConfigResolutionError(FlatTreeException):
    """A record schema does not declare every tree role exactly once."""


class FieldAccessError(FlatTreeException, AttributeError):
    """A named field can't be read from, or written to, a record."""


class MaxDepthExceeded(FlatTreeException):
    """The tree is deeper than the configured ``max_depth``.

    Usually means the parent/id graph contains a cycle.
    """
