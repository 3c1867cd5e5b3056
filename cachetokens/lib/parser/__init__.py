"""
Parser package for delimited token substitution.

Provides the token scanner and the parameter grammar it relies on.
"""

from .base import TokenParser
from .grammar import occurrence_serialize, parameters_parse

__all__ = ["TokenParser", "occurrence_serialize", "parameters_parse"]
