"""Supported Git hosting providers and alias naming rules."""

import re

from shared.errors import InvalidAliasError, InvalidProviderError

PROVIDER_HOSTS = {
    "github": "github.com",
    "bitbucket": "bitbucket.org",
}

# Alias text ends up in filenames and ssh config Host patterns
ALIAS_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]*")
MAX_ALIAS_LENGTH = 64


def resolve_provider(provider: str) -> tuple[str, str]:
    """Return (normalized provider name, hostname), matching case-insensitively."""
    name = (provider or "").strip().lower()
    hostname = PROVIDER_HOSTS.get(name)
    if not hostname:
        raise InvalidProviderError(provider, list(PROVIDER_HOSTS))
    return name, hostname


def validate_alias(alias: str) -> str:
    """Return the alias unchanged if it is safe to interpolate, else raise."""
    if not alias:
        raise InvalidAliasError(alias or "", "alias is empty")
    if len(alias) > MAX_ALIAS_LENGTH:
        raise InvalidAliasError(alias, f"longer than {MAX_ALIAS_LENGTH} characters")
    if not ALIAS_PATTERN.fullmatch(alias):
        raise InvalidAliasError(alias, "contains unsupported characters")
    return alias


def key_name(provider: str, alias: str) -> str:
    return f"id_ed25519_{provider}_{alias}"


def host_alias(hostname: str, alias: str) -> str:
    return f"{hostname}-{alias}"


def clone_command(host_pattern: str) -> str:
    """Copy-pasteable clone command template for an aliased host."""
    return f"git clone git@{host_pattern}:<org>/<repo>.git"
