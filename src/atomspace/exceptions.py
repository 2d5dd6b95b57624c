# src/atomspace/exceptions.py
"""Exceptions raised by AtomSpace operations."""


class AtomSpaceError(Exception):
    """Base class for all AtomSpace errors."""


class ValidationError(AtomSpaceError):
    """Raised for invalid input: unknown type names, empty names or outgoing sets,
    self-shares and unknown share types."""


class NotFoundError(AtomSpaceError):
    """Raised when an atom id is unknown or not owned by the acting owner."""

    def __init__(self, atom_id: str, message: str | None = None) -> None:
        super().__init__(message or f"Atom not found: {atom_id}")
        self.atom_id = atom_id


class AtomImportError(AtomSpaceError):
    """Raised when an import payload cannot be applied.

    Covers malformed payloads, JSON parse failures and outgoing references
    that do not resolve to any imported atom. The whole batch is rolled back.
    """
