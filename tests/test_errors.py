"""Tests for the provisioning exception hierarchy."""

import pytest

from shared.errors import (
    ConfigError,
    FilesystemError,
    InvalidAliasError,
    InvalidProviderError,
    KeyGenerationFailedError,
    MissingArgumentsError,
    ProvisionError,
)


class TestProvisionError:
    def test_to_dict_minimal(self):
        err = ProvisionError("SOME_CODE", "something broke")
        assert err.to_dict() == {"error": "SOME_CODE", "message": "something broke"}
        assert str(err) == "something broke"

    def test_to_dict_with_details_and_hint(self):
        err = ProvisionError("X", "msg", details={"a": 1}, recovery_hint="retry")
        assert err.to_dict() == {
            "error": "X",
            "message": "msg",
            "details": {"a": 1},
            "recovery_hint": "retry",
        }


class TestErrorCodes:
    @pytest.mark.parametrize(
        "err,code",
        [
            (MissingArgumentsError(["alias"]), "MISSING_ARGUMENTS"),
            (InvalidProviderError("gitlab", ["github", "bitbucket"]), "INVALID_PROVIDER"),
            (InvalidAliasError("a b", "contains unsupported characters"), "INVALID_ALIAS"),
            (KeyGenerationFailedError("/k", "boom"), "KEY_GENERATION_FAILED"),
            (FilesystemError("write", "/k", "denied"), "FILESYSTEM_ERROR"),
            (ConfigError("bad"), "CONFIG_ERROR"),
        ],
    )
    def test_codes(self, err, code):
        assert isinstance(err, ProvisionError)
        assert err.code == code

    def test_invalid_provider_message(self):
        err = InvalidProviderError("gitlab", ["github", "bitbucket"])
        assert err.message == "Invalid provider 'gitlab'. Use github or bitbucket."

    def test_missing_arguments_lists_names(self):
        err = MissingArgumentsError(["alias", "provider"])
        assert "alias, provider" in err.message
        assert err.details == {"missing": ["alias", "provider"]}

    def test_keygen_returncode_in_details(self):
        err = KeyGenerationFailedError("/k", "exited", returncode=255)
        assert err.details["returncode"] == 255

    def test_config_error_without_path_has_no_details(self):
        assert "details" not in ConfigError("bad").to_dict()
