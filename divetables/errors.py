"""
Errors raised by the dive-table engine.

All errors derive from ValueError so callers that already guard numeric input
with ``except ValueError`` keep working. Unsafe repetitive dives are not errors:
they come back as ``exceeded=True`` on the result.
"""


class DiveTableError(ValueError):
    """Base class for dive-table calculation errors."""


class InvalidInputCombination(DiveTableError):
    """Dalton's triangle needs exactly two of depth, fO2 and pO2."""


class DepthOutOfRange(DiveTableError):
    """Requested depth is deeper than the deepest table entry."""


class InvalidGroup(DiveTableError):
    """Unknown pressure group or unparseable surface interval."""


class InvalidGasMix(DiveTableError):
    """O2 content outside the range the tables support."""


class ConfigError(DiveTableError):
    """config.yaml or a command line override holds an unusable value."""
