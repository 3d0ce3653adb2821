"""
School ledger configuration.

YAML in, frozen ``LedgerConfig`` out. ``load_config()`` with no argument
returns the bundled default school.
"""

from ledger_config.loader import (
    DEFAULT_CONFIG_PATH,
    compute_checksum,
    load_config,
    load_yaml_file,
    parse_config,
)
from ledger_config.schema import LedgerConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "LedgerConfig",
    "compute_checksum",
    "load_config",
    "load_yaml_file",
    "parse_config",
]
