from __future__ import annotations


class PictError(Exception):
    """Base class for every error raised by the picture algebra."""


class InvalidArgument(PictError, ValueError):
    """Bad operand: empty variadic call, non-positive ratio, bad depth."""


class DegenerateFrame(PictError, ValueError):
    """
    Frame with parallel or zero-length edges.

    Only raised when a canvas is configured with ``strict_frames=True``;
    otherwise such frames render nothing.
    """


class RenderingCapabilityError(PictError, RuntimeError):
    """Failure reported by a canvas or by the path parser."""
