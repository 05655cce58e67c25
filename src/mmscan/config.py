"""
mmscan - Configuration
======================

Scan configuration: buffer capacity, the fallback source path used by the
command-line tool, and whether statements are retained after a scan.
Configuration can come from:
- Default values (defined here)
- Environment variables (ScanConfig.from_env)
- Command-line options (applied by the CLI on top of from_env)
"""

from dataclasses import dataclass
from pathlib import Path
import os


# 100,000,000 bytes comfortably holds set.mm and its siblings.
DEFAULT_CAPACITY = 100_000_000

DEFAULT_SOURCE_PATH = Path("set.mm")


@dataclass
class ScanConfig:
    """
    Configuration for a scan.

    Attributes:
        capacity: Largest source accepted by the loader, in bytes
        default_path: Source file used when the CLI is given no argument
        keep_statements: Retain every Statement in the ScanResult
    """

    capacity: int = DEFAULT_CAPACITY
    default_path: Path = DEFAULT_SOURCE_PATH
    keep_statements: bool = True

    @classmethod
    def from_env(cls) -> "ScanConfig":
        """
        Create ScanConfig from environment variables.

        Environment variables (all optional):
            MMSCAN_CAPACITY: Buffer capacity in bytes (positive integer)
            MMSCAN_DEFAULT_PATH: Fallback source file for the CLI

        Returns:
            ScanConfig with values from environment variables
        """
        config = cls()

        if capacity := os.environ.get("MMSCAN_CAPACITY"):
            try:
                value = int(capacity)
            except ValueError:
                value = 0  # Ignore invalid values
            if value > 0:
                config.capacity = value

        if default_path := os.environ.get("MMSCAN_DEFAULT_PATH"):
            config.default_path = Path(default_path)

        return config
