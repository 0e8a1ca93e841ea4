"""Protocol layer: command normalization, argument parsing, and word encoding."""

from .request import Request
from .query import Query, Action
