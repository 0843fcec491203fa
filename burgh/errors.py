"""Exceptions raised by settlement generation."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when generation is requested with invalid external input.

    Examples are an unknown settlement kind, map settings outside their
    valid ranges, a building distribution naming an unknown type, or a road
    layer asked for fewer than one main road. It is raised fail-fast before
    any generation work starts.
    """
