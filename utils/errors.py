# utils/errors.py
# Failure kinds raised by the lineage resolver


class LookupFailure(Exception):
    """Base for every way a lookup can fail."""


class ValidationError(LookupFailure):
    """Query was empty or whitespace only; nothing was fetched."""


class NotFoundError(LookupFailure):
    """Primary pokemon lookup answered with a non-success status."""

    def __init__(self, name: str):
        super().__init__(f"pokemon '{name}' not found")
        self.name = name


class ResolutionError(LookupFailure):
    """Species, evolution chain or stage lookup failed, or a payload was malformed."""
