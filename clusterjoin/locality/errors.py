class LocalityError(Exception):
    """Raised when node locality cannot be resolved from instance metadata."""
