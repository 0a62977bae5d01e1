"""Result types returned by the provisioner."""

import json
from dataclasses import asdict, dataclass, field


@dataclass
class SetupSummary:
    """Paths and actions produced by one provisioning run."""

    provider: str
    hostname: str
    alias: str
    host_alias: str
    folder: str
    private_key: str
    public_key: str
    config_file: str
    known_hosts: str
    clone_command: str
    public_key_fingerprint: str | None = None
    # Actions taken during this run (all False/empty on a repeat run)
    created_folder: bool = False
    generated_key: bool = False
    created_known_hosts: bool = False
    added_hosts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: dict) -> "SetupSummary":
        data.setdefault("public_key_fingerprint", None)
        data.setdefault("created_folder", False)
        data.setdefault("generated_key", False)
        data.setdefault("created_known_hosts", False)
        data.setdefault("added_hosts", [])
        return cls(**data)

    def format_report(self) -> str:
        """Human-readable success report."""
        lines = [
            f"SUCCESS: SSH setup complete for {self.provider.upper()}",
            f"Folder       : {self.folder}",
            f"Private Key  : {self.private_key}",
            f"Public Key   : {self.public_key}",
            f"Config File  : {self.config_file}",
            f"Known Hosts  : {self.known_hosts}",
        ]
        if self.public_key_fingerprint:
            lines.append(f"Fingerprint  : {self.public_key_fingerprint}")
        lines.append("")
        lines.append("Usage for cloning:")
        lines.append(f" {self.clone_command}")
        return "\n".join(lines)
