"""Failure categories raised by the projection core."""

from __future__ import annotations


class ProjectionContractError(AssertionError):
    """A projection matrix was applied to vectors of the wrong dimensions.

    This signals a bug in the calling code (the matrix was built for other
    dimensions than it is used with). It is logged at CRITICAL before being
    raised and is not meant to be caught and retried.
    """


__all__ = ["ProjectionContractError"]
