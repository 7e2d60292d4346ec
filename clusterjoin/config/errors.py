class ConfigError(Exception):
    """Raised when the run configuration cannot be read or is invalid."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Invalid config '{path}': {message}")
