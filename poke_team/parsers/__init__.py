"""Team export parsers."""

from .showdown import parse_team

__all__ = ["parse_team"]
