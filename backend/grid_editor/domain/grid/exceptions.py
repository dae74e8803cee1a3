class MalformedValue(ValueError):
    """Raised when a grid value is not valid JSON or not shaped like a grid."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
