"""force10 exception hierarchy.

Resolution misses and missing files are never exceptions; they surface as
``None`` and the route is dropped. These types cover misuse at setup time.
"""


class Force10Error(Exception):
    """Base for all force10-specific errors."""


class ConfigurationError(Force10Error):
    """Raised when route registration or wiring is invalid.

    Typically raised while the route table is being built, before any
    manifest is generated.
    """


class AppResolutionError(Force10Error):
    """Raised by the CLI when an import string does not yield a route source."""
