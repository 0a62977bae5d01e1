"""Shared definitions for shared-ssh."""

from .errors import (
    ConfigError,
    FilesystemError,
    InvalidAliasError,
    InvalidProviderError,
    KeyGenerationFailedError,
    MissingArgumentsError,
    ProvisionError,
)
from .models import SetupSummary

__all__ = [
    "ConfigError",
    "FilesystemError",
    "InvalidAliasError",
    "InvalidProviderError",
    "KeyGenerationFailedError",
    "MissingArgumentsError",
    "ProvisionError",
    "SetupSummary",
]
