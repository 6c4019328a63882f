"""Generate EmmyLua annotation stubs from a catalog of host-language types."""

__version__ = "0.4.0"
