"""Error taxonomy — every failure in the audit pipeline is fatal to the run."""

from __future__ import annotations


class AuditError(Exception):
    """Base class for all errors raised while building an audit report."""


class LoadError(AuditError):
    """An input file or record could not be read or decoded."""


class ResolutionError(AuditError, LookupError):
    """A name or identifier does not resolve to an object in the catalog."""


class DomainError(AuditError, ValueError):
    """An object carries a value that is meaningless in its domain."""
