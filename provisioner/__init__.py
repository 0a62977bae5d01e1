"""Shared SSH identity provisioning for Git hosting providers."""

from provisioner.config import Config
from provisioner.provision import Provisioner

__all__ = ["Config", "Provisioner"]
