"""
Error types raised by the capability wrappers.

Errors coming from boto3/botocore are never wrapped; only failures detected
by this library itself are defined here.
"""


class ConfigurationError(Exception):
    """Raised when environment configuration is invalid."""
    pass


class SecretsError(Exception):
    """Base class for errors raised while retrieving secrets."""

    default_message = "Failed to retrieve secret."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class MissingDataError(SecretsError):
    """Raised when a secret returned by the vault lacks its identity or payload."""

    default_message = "The secret value is missing expected data."


class WrongSecretTypeError(SecretsError):
    """Raised when the decrypted secret is not of the requested kind."""

    default_message = "The decrypted secret is of an unexpected type."
