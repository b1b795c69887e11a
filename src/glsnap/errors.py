"""Exception types raised by glsnap."""

from __future__ import annotations


class GlsnapError(Exception):
    """Base class for glsnap errors."""


class BackendInitError(GlsnapError):
    """Off-screen context or viewport could not be set up."""


class SurfaceError(GlsnapError):
    """Invalid operation on a drawing surface."""


class HarnessStateError(GlsnapError):
    """Harness step called out of order."""
