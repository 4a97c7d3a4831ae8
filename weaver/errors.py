"""
WEAVER++/ARC Lesion Sweep — Exceptions
=======================================
Exception hierarchy:

    WeaverError (base)
    └── ConfigurationError - malformed topology, unknown study or
                             assessment, invalid run parameters

Configuration errors are raised before any simulation cell runs.
Degenerate fits (a vanishing control contrast) are not exceptions: they
surface as undefined (``nan``) scores and a fit without a best index.
"""


class WeaverError(Exception):
    """Base exception for all errors raised by this package."""


class ConfigurationError(WeaverError):
    """Invalid or inconsistent configuration.

    Raised for mismatched connection-matrix shapes, missing topology
    entries, unknown study or assessment keys, invalid grid sizes and
    attempts to rate-scale a network twice.
    """
