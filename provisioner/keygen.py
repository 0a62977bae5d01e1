"""Ed25519 keypair generation for shared SSH identities."""

import base64
import hashlib
import logging
import subprocess
from pathlib import Path

from shared.errors import KeyGenerationFailedError

logger = logging.getLogger(__name__)


def public_key_path(key_path: Path) -> Path:
    """Public key path: the private key filename with '.pub' appended."""
    key_path = Path(key_path)
    return key_path.with_name(key_path.name + ".pub")


def run_ssh_keygen(key_path: Path, comment: str, ssh_keygen: str = "ssh-keygen") -> None:
    """Run ssh-keygen for an unencrypted ed25519 key, passing stdio through."""
    cmd = [ssh_keygen, "-t", "ed25519", "-f", str(key_path), "-C", comment, "-N", ""]
    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError:
        raise KeyGenerationFailedError(str(key_path), f"'{ssh_keygen}' not found")
    except subprocess.CalledProcessError as e:
        raise KeyGenerationFailedError(
            str(key_path), f"{ssh_keygen} exited with code {e.returncode}", e.returncode
        )


def write_keypair(key_path: Path, comment: str) -> None:
    """Generate an Ed25519 keypair in-process, in OpenSSH format."""
    from cryptography.hazmat.primitives import serialization
    from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

    private_key = Ed25519PrivateKey.generate()

    private_bytes = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.OpenSSH,
        encryption_algorithm=serialization.NoEncryption(),
    )
    key_path.write_bytes(private_bytes)
    key_path.chmod(0o600)

    public_bytes = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.OpenSSH,
        format=serialization.PublicFormat.OpenSSH,
    )
    line = public_bytes + (b" " + comment.encode() if comment else b"") + b"\n"
    public_key_path(key_path).write_bytes(line)


def generate_keypair(
    key_path: Path,
    comment: str,
    backend: str = "ssh-keygen",
    ssh_keygen: str = "ssh-keygen",
) -> Path:
    """
    Generate an unencrypted Ed25519 keypair at key_path.

    Args:
        key_path: Private key path; the public key goes to key_path + '.pub'
        comment: Key comment (the alias)
        backend: 'ssh-keygen' runs the external tool, 'cryptography' generates in-process
        ssh_keygen: ssh-keygen executable name or path

    Returns:
        The private key path.

    Raises:
        KeyGenerationFailedError: generation failed; no retry is attempted.
    """
    key_path = Path(key_path)

    if backend == "ssh-keygen":
        run_ssh_keygen(key_path, comment, ssh_keygen)
    elif backend == "cryptography":
        try:
            write_keypair(key_path, comment)
        except OSError as e:
            raise KeyGenerationFailedError(str(key_path), str(e))
    else:
        raise KeyGenerationFailedError(str(key_path), f"unknown backend '{backend}'")

    if not key_path.exists():
        raise KeyGenerationFailedError(str(key_path), "private key was not written")

    logger.debug(f"Generated SSH keypair: {key_path}")
    return key_path


def get_key_fingerprint(key_path: Path) -> str:
    """
    Get SHA256 fingerprint of an SSH public key.

    Args:
        key_path: Path to the private key (the '.pub' file next to it is read)

    Returns:
        Fingerprint string like "SHA256:abc123..." (unpadded, as ssh-keygen prints it)
    """
    pub_path = public_key_path(key_path)
    if not pub_path.exists():
        raise FileNotFoundError(f"Public key not found: {pub_path}")

    # "ssh-ed25519 AAAA... comment"
    parts = pub_path.read_text().strip().split()
    if len(parts) < 2:
        raise ValueError(f"Invalid public key format: {pub_path}")

    digest = hashlib.sha256(base64.b64decode(parts[1])).digest()
    return "SHA256:" + base64.b64encode(digest).decode().rstrip("=")
