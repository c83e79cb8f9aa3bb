class SkyscoreError(Exception):
    """Base exception for skyscore errors."""


class ContractError(SkyscoreError, TypeError):
    """Raised when a caller passes a structurally invalid argument."""


class UnknownVariantError(SkyscoreError, ValueError):
    """Raised for a scoring variant name that is not registered."""
