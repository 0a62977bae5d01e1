"""Host blocks in the shared OpenSSH client configuration file."""

from dataclasses import dataclass
from pathlib import Path

from paramiko import SSHConfig


@dataclass
class HostBlock:
    """One `Host` stanza pointing a host pattern at a shared identity."""

    pattern: str
    hostname: str
    identity_file: str
    known_hosts: str
    user: str = "git"

    def render(self) -> str:
        return (
            f"\nHost {self.pattern}\n"
            f"    HostName {self.hostname}\n"
            f"    User {self.user}\n"
            f"    IdentityFile {self.identity_file}\n"
            f"    IdentitiesOnly yes\n"
            f"    UserKnownHostsFile {self.known_hosts}\n"
            f"    GlobalKnownHostsFile {self.known_hosts}\n"
        )


def configured_hosts(text: str) -> set[str]:
    """All host patterns declared by `Host` lines in an ssh config."""
    if not text.strip():
        return set()
    # get_hostnames() assumes every entry has a "host" key; Match blocks do not
    parsed = SSHConfig.from_text(text)
    return {pattern for entry in parsed._config for pattern in entry.get("host", [])}


def read_config(path: Path) -> str:
    path = Path(path)
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def ensure_host_blocks(path: Path, blocks: list[HostBlock]) -> list[str]:
    """
    Append each block whose host pattern is not already declared.

    Presence is decided by exact pattern equality against the parsed config,
    so `Host github.com-work` does not hide a missing `Host github.com`.
    Existing content is never rewritten.

    Returns:
        Patterns of the blocks that were appended, in order.
    """
    path = Path(path)
    existing = configured_hosts(read_config(path))

    added = []
    for block in blocks:
        if block.pattern in existing:
            continue
        with open(path, "a", encoding="utf-8") as f:
            f.write(block.render())
        existing.add(block.pattern)
        added.append(block.pattern)
    return added
