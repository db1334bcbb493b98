"""String literal substitution and its inverse."""

from sbdice.substitution.mapping import build_mapping, dump_mapping, load_mapping
from sbdice.substitution.visitor import LiteralRestorer, LiteralVisitor

__all__ = [
    "LiteralRestorer",
    "LiteralVisitor",
    "build_mapping",
    "dump_mapping",
    "load_mapping",
]
