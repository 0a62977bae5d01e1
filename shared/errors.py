"""Exception hierarchy for shared SSH provisioning."""


class ProvisionError(Exception):
    """Base exception for provisioning failures with structured error details."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict | None = None,
        recovery_hint: str | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.recovery_hint = recovery_hint
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to structured error response."""
        result = {
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.recovery_hint:
            result["recovery_hint"] = self.recovery_hint
        return result


class MissingArgumentsError(ProvisionError):
    """Raised when alias or provider is not supplied."""

    def __init__(self, missing: list[str]):
        super().__init__(
            code="MISSING_ARGUMENTS",
            message=f"Missing required argument(s): {', '.join(missing)}",
            details={"missing": missing},
            recovery_hint="Usage: shared-ssh <alias> <provider>",
        )


class InvalidProviderError(ProvisionError):
    """Raised when the provider is not one of the supported hosting services."""

    def __init__(self, provider: str, supported: list[str]):
        super().__init__(
            code="INVALID_PROVIDER",
            message=f"Invalid provider '{provider}'. Use {' or '.join(supported)}.",
            details={"provider": provider, "supported": supported},
        )


class InvalidAliasError(ProvisionError):
    """Raised when an alias contains characters unsafe for filenames or config text."""

    def __init__(self, alias: str, reason: str):
        super().__init__(
            code="INVALID_ALIAS",
            message=f"Invalid alias '{alias}': {reason}",
            details={"alias": alias},
            recovery_hint="Use letters, digits, '.', '_' or '-', starting with a letter or digit.",
        )


class KeyGenerationFailedError(ProvisionError):
    """Raised when the keypair could not be generated."""

    def __init__(self, key_path: str, reason: str, returncode: int | None = None):
        details = {"key_path": key_path}
        if returncode is not None:
            details["returncode"] = returncode
        super().__init__(
            code="KEY_GENERATION_FAILED",
            message=f"Key generation failed for {key_path}: {reason}",
            details=details,
            recovery_hint="Check that ssh-keygen is installed and the shared directory is writable.",
        )


class FilesystemError(ProvisionError):
    """Raised when a directory or file operation fails."""

    def __init__(self, operation: str, path: str, reason: str):
        super().__init__(
            code="FILESYSTEM_ERROR",
            message=f"Failed to {operation} {path}: {reason}",
            details={"operation": operation, "path": path},
            recovery_hint="Fix the permissions or free disk space, then re-run; completed steps are skipped.",
        )


class ConfigError(ProvisionError):
    """Raised when the provisioning configuration is invalid."""

    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else None
        super().__init__(code="CONFIG_ERROR", message=message, details=details)
