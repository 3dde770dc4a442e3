"""Validation for per-run autosnap options."""

from __future__ import annotations

import re

from core.constants import LABEL_PATTERN, SNAPSHOT_SEPARATOR
from core.errors import AutosnapConfigError
from core.types import AutosnapOptions

_LABEL_RE = re.compile(LABEL_PATTERN)


def validate_options(options: AutosnapOptions) -> AutosnapOptions:
    """Check run options before any inventory is read.

    Args:
        options: Options assembled from CLI flags and policy file.

    Returns:
        The same options when valid.

    Raises:
        AutosnapConfigError: If any option is out of range or malformed.
    """
    if not _LABEL_RE.fullmatch(options.label):
        raise AutosnapConfigError(
            f"Invalid label '{options.label}': use letters, digits, '_', '.' or ':' "
            "such as 'hourly' or 'daily'."
        )
    if not options.prefix or any(
        char in (SNAPSHOT_SEPARATOR, "/") or char.isspace() for char in options.prefix
    ):
        raise AutosnapConfigError(
            f"Invalid prefix '{options.prefix}': must be non-empty and may not contain "
            "'@', '/' or whitespace."
        )
    if options.keep < 0:
        raise AutosnapConfigError(
            f"Invalid keep count {options.keep}: must be 0 or greater. "
            "Use 0 to destroy every matching snapshot."
        )
    if options.min_size_kb < 0:
        raise AutosnapConfigError(
            f"Invalid min size {options.min_size_kb}: must be 0 or greater. "
            "Use 0 to create a snapshot on every run."
        )
    return options
