"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a runtime entity cannot be created."""


class NoActivePlayerError(ValueError):
    """Raised when an operation needs a player before a game has started."""
