from __future__ import annotations


class ContractError(ValueError):
    """Raised when request violates documented contract (e.g., query shape)."""


class AmbiguousOrEmptyQueryError(ContractError):
    """Raised when a query names none, or more than one, of ids/names/tags."""


class ChunkDecodeError(ContractError):
    """Raised when the server payload is not a list of chunk objects."""


class BinderError(RuntimeError):
    """Raised when content cannot be bound into a document."""
