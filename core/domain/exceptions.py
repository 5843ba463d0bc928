"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. Every caller-facing failure of the
license authority is one of the classes below, identified by a stable code.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class InvalidLicenseInputError(LicenseException):
    """Raised when arguments are malformed or a license is structurally invalid."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="INVALID_INPUT")


class LicenseNotFoundError(LicenseException):
    """Raised when no license exists for the given key."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class LicenseAlreadyRevokedError(LicenseException):
    """Raised when a mutation other than revoke targets a revoked license."""

    def __init__(self, message: str = "License is revoked"):
        super().__init__(message, code="LICENSE_ALREADY_REVOKED")


class InvalidExtensionError(LicenseException):
    """Raised when a new expiration does not move the current one forward."""

    def __init__(self, message: str = "Invalid license extension"):
        super().__init__(message, code="INVALID_EXTENSION")


class AdminException(DomainException):
    """Base exception for admin credential errors."""

    pass


class InvalidAdminKeyError(AdminException):
    """Raised when an admin key is missing, unknown or expired."""

    def __init__(self, message: str = "Invalid admin key"):
        super().__init__(message, code="INVALID_ADMIN_KEY")


class DuplicateLicenseKeyError(Exception):
    """
    Raised by a repository when a license key is already taken.

    Internal only: the registry recovers from it by generating a new key.
    """

    def __init__(self, key: str):
        super().__init__(f"License key already exists: {key}")
        self.key = key


class LicenseKeyGenerationError(Exception):
    """Raised when no unique license key could be generated."""

    pass
