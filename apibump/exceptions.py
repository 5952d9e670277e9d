"""Custom exceptions for the apibump engine."""


class ApiBumpError(Exception):
    """Base exception for apibump errors."""
    pass


class ValidationError(ApiBumpError):
    """Raised when input validation fails."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SymbolTableError(ApiBumpError):
    """Raised when a resolver dump cannot be read into a symbol table."""
    def __init__(self, message: str, symbol: str = None):
        super().__init__(message if symbol is None else f"{symbol}: {message}")
        self.message = message
        self.symbol = symbol


class SnapshotFormatError(ApiBumpError):
    """Raised when a serialized snapshot is malformed."""
    def __init__(self, message: str, path: str = None):
        super().__init__(message if path is None else f"{path}: {message}")
        self.message = message
        self.path = path


class SnapshotSizeError(ApiBumpError):
    """Raised when a serialized snapshot exceeds the size limit."""
    def __init__(self, size_mb: float, limit_mb: float):
        super().__init__(f"Snapshot size ({size_mb:.2f}MB) exceeds limit ({limit_mb}MB)")
        self.size_mb = size_mb
        self.limit_mb = limit_mb


class ConfigError(ApiBumpError):
    """Raised when an engine config file is invalid."""
    pass


class RuleError(ApiBumpError):
    """Raised when an ignore rule is invalid."""
    def __init__(self, rule: str, message: str):
        super().__init__(f"Invalid rule '{rule}': {message}")
        self.rule = rule
        self.message = message
