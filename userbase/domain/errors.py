"""Error types shared across layers."""


class ConfigurationError(Exception):
    """Deployment is misconfigured. Fatal at startup, never retried."""

    def __init__(self, setting: str, reason: str) -> None:
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid configuration for {setting}: {reason}")


class StorageError(Exception):
    """Base class for persistence faults."""


class DuplicateEmailError(StorageError):
    """Raised when a write would violate the unique email constraint."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already exists: {email}")
