"""Seeding of the shared known_hosts file with pinned provider host keys."""

import os
from pathlib import Path

from paramiko.hostkeys import HostKeys


def ensure_known_hosts(path: Path, entries: list[str]) -> bool:
    """
    Write the trusted host entries to path if the file does not exist yet.

    The file is created owner read/write only. An existing file is never
    modified.

    Returns:
        True if the file was created.
    """
    path = Path(path)
    if path.exists():
        return False

    content = "\n".join(entries) + "\n"
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)
    return True


def missing_hosts(path: Path, hostnames: list[str]) -> list[str]:
    """Hostnames that have no key entry in an existing known_hosts file."""
    host_keys = HostKeys(str(path))
    return [name for name in hostnames if host_keys.lookup(name) is None]
