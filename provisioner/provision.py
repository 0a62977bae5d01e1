"""Provisioning of a shared SSH identity for one provider alias."""

import logging
from pathlib import Path
from typing import Optional

from paramiko.hostkeys import InvalidHostKey
from paramiko.ssh_exception import ConfigParseError

from provisioner.config import Config
from provisioner.keygen import generate_keypair, get_key_fingerprint, public_key_path
from provisioner.known_hosts import ensure_known_hosts, missing_hosts
from provisioner.providers import (
    clone_command,
    host_alias,
    key_name,
    resolve_provider,
    validate_alias,
)
from provisioner.ssh_config import HostBlock, ensure_host_blocks
from shared.errors import ConfigError, FilesystemError, MissingArgumentsError
from shared.models import SetupSummary

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config"
KNOWN_HOSTS_FILE_NAME = "known_hosts"


class Provisioner:
    """
    Sets up a shared SSH identity for a (provider, alias) pair.

    Every step is skipped when its artifact already exists, so re-running after
    a failure resumes where the previous run stopped. Nothing is rolled back.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    @property
    def ssh_dir(self) -> Path:
        return self.config.shared_ssh_dir

    def provision(self, alias: Optional[str], provider: Optional[str]) -> SetupSummary:
        """
        Provision keypair, known_hosts and ssh config blocks.

        Raises:
            MissingArgumentsError, InvalidProviderError, InvalidAliasError:
                before any filesystem access
            ConfigError: trusted host entries or the existing ssh config are invalid
            KeyGenerationFailedError: key generation failed
            FilesystemError: a directory or file operation failed
        """
        missing = [name for name, value in (("alias", alias), ("provider", provider)) if not value]
        if missing:
            raise MissingArgumentsError(missing)

        provider_name, hostname = resolve_provider(provider)
        alias = validate_alias(alias)
        trusted_hosts = self.config.resolve_trusted_hosts()

        ssh_dir = self.ssh_dir
        created_folder = self._ensure_dir(ssh_dir)

        name = key_name(provider_name, alias)
        private_key = ssh_dir / name
        public_key = public_key_path(private_key)
        config_path = ssh_dir / CONFIG_FILE_NAME
        known_hosts_path = ssh_dir / KNOWN_HOSTS_FILE_NAME

        generated_key = False
        if not private_key.exists():
            logger.info(f"Generating SSH key for {provider_name}: {name}")
            generate_keypair(
                private_key,
                alias,
                backend=self.config.keygen_backend,
                ssh_keygen=self.config.ssh_keygen_path,
            )
            generated_key = True

        created_known_hosts = self._ensure_known_hosts(known_hosts_path, trusted_hosts, hostname)

        alias_pattern = host_alias(hostname, alias)
        blocks = [
            HostBlock(hostname, hostname, str(private_key), str(known_hosts_path)),
            HostBlock(alias_pattern, hostname, str(private_key), str(known_hosts_path)),
        ]
        added_hosts = self._ensure_host_blocks(config_path, blocks)
        for pattern in added_hosts:
            if pattern == hostname:
                logger.info(f"Added base host: {pattern}")
            else:
                logger.info(f"Added alias: {pattern}")

        fingerprint = None
        try:
            fingerprint = get_key_fingerprint(private_key)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read public key fingerprint: {e}")

        return SetupSummary(
            provider=provider_name,
            hostname=hostname,
            alias=alias,
            host_alias=alias_pattern,
            folder=str(ssh_dir),
            private_key=str(private_key),
            public_key=str(public_key),
            config_file=str(config_path),
            known_hosts=str(known_hosts_path),
            clone_command=clone_command(alias_pattern),
            public_key_fingerprint=fingerprint,
            created_folder=created_folder,
            generated_key=generated_key,
            created_known_hosts=created_known_hosts,
            added_hosts=added_hosts,
        )

    def _ensure_dir(self, ssh_dir: Path) -> bool:
        if ssh_dir.is_dir():
            return False
        try:
            ssh_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError("create directory", str(ssh_dir), str(e))
        logger.info(f"Created shared SSH folder: {ssh_dir}")
        return True

    def _ensure_known_hosts(self, path: Path, entries: list[str], hostname: str) -> bool:
        try:
            created = ensure_known_hosts(path, entries)
        except OSError as e:
            raise FilesystemError("write", str(path), str(e))

        if created:
            logger.info(f"Created known_hosts: {path}")
            return True

        # Existing files are left alone; only flag a missing pin
        try:
            absent = missing_hosts(path, [hostname])
        except OSError as e:
            raise FilesystemError("read", str(path), str(e))
        except UnicodeDecodeError as e:
            raise FilesystemError("read", str(path), f"not valid text ({e})")
        except InvalidHostKey as e:
            logger.warning(f"Unparsable entry in {path}: {e.line.strip()[:60]}")
            return False
        if absent:
            logger.warning(f"{path} has no host key for {hostname}; add it manually")
        return False

    def _ensure_host_blocks(self, path: Path, blocks: list[HostBlock]) -> list[str]:
        try:
            return ensure_host_blocks(path, blocks)
        except ConfigParseError as e:
            raise ConfigError(f"Cannot parse ssh config: {e}", path=str(path))
        except UnicodeDecodeError as e:
            raise FilesystemError("read", str(path), f"not valid UTF-8 ({e})")
        except OSError as e:
            raise FilesystemError("update", str(path), str(e))
