"""Configuration management for the shared SSH provisioner."""

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from paramiko.hostkeys import HostKeyEntry, InvalidHostKey
from paramiko.ssh_exception import SSHException

from shared.errors import ConfigError
from shared.version import CONFIG_ENV_VAR

DEFAULT_CONFIG_DIR = Path.home() / ".sharedssh"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"

# Fixed shared roots, independent of the invoking user
WINDOWS_BASE_DIR = "D:\\klarion6.0\\ws"
POSIX_BASE_DIR = "/nfs/ws"
DEFAULT_SSH_DIR_NAME = "shared_ssh"

KEYGEN_BACKENDS = ("ssh-keygen", "cryptography")

GITHUB_HOST_KEY = (
    "github.com ssh-ed25519 "
    "AAAAC3NzaC1lZDI1NTE5AAAAIOMqqnkVzrm0SdG6UOoqKLsabgH5C9okWi0dh2l9GKJl"
)
BITBUCKET_HOST_KEY = (
    "bitbucket.org ssh-rsa "
    "AAAAB3NzaC1yc2EAAAADAQABAAABgQDQeJzhupRu0u0cdegZIa8e86EG2qOCsIsD1Xw0xSeiPDlCr7kq97NLmMbpKTX6E"
    "sc30NuoqEEHCuc7yWtwp8dI76EEEB1VqY9QJq6vk+aySyboD5QF61I/1WeTwu+deCbgKMGbUijeXhtfbxSxm6JwGrXrhB"
    "dofTsbKRUsrN1WoNgUa8uqN1Vx6WAJw1JHPhglEGGHea6QICwJOAr/6mrui/oB7pkaWKHj3z7d1IC4KWLtY47elvjbaT"
    "lkN04Kc/5LFEirorGYVbt15kAUlqGM65pk6ZBxtaO3+30LVlORZkxOh+LKL/BvbZ/iRNhItLqNyieoQj/uh/7Iv4uyH/"
    "cV/0b4WDSd3DptigWq84lJubb9t/DnZlrJazxyDCulTmKdOR7vs9gMTo+uoIrPSb8ScTtvw65+odKAlBj59dhnVp9zd7Q"
    "UojOpXlL62Aw56U4oO+FALuevvMjiWeavKhJqlR7i5n9srYcrNV7ttmDw7kf/97P5zauIhxcjX+xHv4M="
)
DEFAULT_TRUSTED_HOSTS = [GITHUB_HOST_KEY, BITBUCKET_HOST_KEY]


def default_base_dir(system: Optional[str] = None) -> Path:
    """Platform default for the shared base directory."""
    system = system or platform.system()
    if system == "Windows":
        return Path(WINDOWS_BASE_DIR)
    return Path(POSIX_BASE_DIR)


def default_config_file() -> Path:
    """Config file location: $SHAREDSSH_CONFIG, else ~/.sharedssh/config.yaml."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE


def validate_known_hosts_line(line: str) -> None:
    """Raise ConfigError if a line is not a parseable known_hosts entry."""
    try:
        entry = HostKeyEntry.from_line(line)
    except (InvalidHostKey, SSHException, ValueError) as e:
        raise ConfigError(f"Invalid trusted host entry: {line[:60]}... ({e})")
    if entry is None:
        raise ConfigError(f"Invalid trusted host entry: {line[:60]}")


def read_known_hosts_lines(path: Path) -> list[str]:
    """Read entries from a known_hosts style file, skipping blanks and comments."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read trusted hosts file: {e}", path=str(path))
    return [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]


@dataclass
class Config:
    """Provisioner configuration."""
    # Shared location (None = platform default)
    base_dir: Optional[str] = None
    ssh_dir_name: str = DEFAULT_SSH_DIR_NAME

    # Pinned provider fingerprints
    trusted_hosts: list[str] = field(default_factory=lambda: list(DEFAULT_TRUSTED_HOSTS))
    trusted_hosts_file: Optional[str] = None

    # Key generation
    keygen_backend: str = "ssh-keygen"
    ssh_keygen_path: str = "ssh-keygen"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def shared_base_dir(self) -> Path:
        if self.base_dir:
            return Path(self.base_dir)
        return default_base_dir()

    @property
    def shared_ssh_dir(self) -> Path:
        return self.shared_base_dir / self.ssh_dir_name

    def resolve_trusted_hosts(self) -> list[str]:
        """Trusted host lines to seed known_hosts with, validated."""
        if self.trusted_hosts_file:
            lines = read_known_hosts_lines(Path(self.trusted_hosts_file))
        else:
            lines = [line.strip() for line in self.trusted_hosts if line.strip()]

        if not lines:
            raise ConfigError("No trusted host entries configured")
        for line in lines:
            validate_known_hosts_line(line)
        return lines

    def validate(self) -> None:
        for name in ("base_dir", "trusted_hosts_file", "log_file"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {type(value).__name__}")
        for name in ("ssh_dir_name", "keygen_backend", "ssh_keygen_path", "log_level"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {type(value).__name__}")
        if not isinstance(self.trusted_hosts, list) or not all(
            isinstance(line, str) for line in self.trusted_hosts
        ):
            raise ConfigError("trusted_hosts must be a list of strings")
        if self.keygen_backend not in KEYGEN_BACKENDS:
            raise ConfigError(
                f"Unknown keygen_backend '{self.keygen_backend}'. "
                f"Use one of: {', '.join(KEYGEN_BACKENDS)}"
            )
        if not self.ssh_dir_name or "/" in self.ssh_dir_name or "\\" in self.ssh_dir_name:
            raise ConfigError(f"Invalid ssh_dir_name: '{self.ssh_dir_name}'")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from file."""
        path = path or default_config_file()

        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}", path=str(path))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read config file: {e}", path=str(path))

        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping", path=str(path))

        config = cls(
            base_dir=data.get("base_dir"),
            ssh_dir_name=data.get("ssh_dir_name", DEFAULT_SSH_DIR_NAME),
            trusted_hosts=data.get("trusted_hosts", list(DEFAULT_TRUSTED_HOSTS)),
            trusted_hosts_file=data.get("trusted_hosts_file"),
            keygen_backend=data.get("keygen_backend", "ssh-keygen"),
            ssh_keygen_path=data.get("ssh_keygen_path", "ssh-keygen"),
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
        )
        config.validate()
        return config

    def save(self, path: Optional[Path] = None) -> Path:
        """Save configuration to file."""
        path = path or default_config_file()
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "base_dir": self.base_dir,
            "ssh_dir_name": self.ssh_dir_name,
            "trusted_hosts": self.trusted_hosts,
            "trusted_hosts_file": self.trusted_hosts_file,
            "keygen_backend": self.keygen_backend,
            "ssh_keygen_path": self.ssh_keygen_path,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)
        return path
