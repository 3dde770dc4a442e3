"""Core constants used across autosnap modules.

This module centralizes defaults and naming constants.
Keeping values here avoids magic literals in policy logic.
"""

from __future__ import annotations

DEFAULT_ZFS_COMMAND = "zfs"
DEFAULT_OPT_IN_PROPERTY = "com.sun:auto-snapshot"
DEFAULT_COMMAND_TIMEOUT_SECONDS = 300.0
DEFAULT_SNAPSHOT_PREFIX = "zfs-snapshot"
DEFAULT_KEEP_COUNT = 8
DEFAULT_MIN_SIZE_KB = 0
BYTES_PER_KB = 1024
SNAPSHOT_SEPARATOR = "@"
NAME_FIELD_SEPARATOR = "-"
LEGACY_LABEL_SEPARATOR = "_"
SNAPSHOT_TIMESTAMP_FORMAT = "%Y-%m-%d-%H%M%S"
LEGACY_SNAPSHOT_TIMESTAMP_FORMAT = "%Y-%m-%d-%H%M"
OPT_IN_SENTINELS = ("true", "on")
UNSET_PROPERTY_VALUE = "-"
INVENTORY_COLUMN_COUNT = 5
INVENTORY_DATASET_TYPES = "filesystem,volume,snapshot"
LABEL_PATTERN = r"[A-Za-z0-9_.:]+"
POLICY_FILE_VERSION = 1
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
