"""Typed policy-file parsing for per-label retention defaults.

This module loads and validates YAML policy files passed with ``--config``.
A policy file lets one timer unit per label share a single place for
keep counts, size thresholds, and prefixes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, cast

from core.constants import (
    DEFAULT_KEEP_COUNT,
    DEFAULT_MIN_SIZE_KB,
    DEFAULT_SNAPSHOT_PREFIX,
    POLICY_FILE_VERSION,
)
from core.errors import AutosnapConfigError, AutosnapDependencyError
from core.types import AutosnapOptions

_ROOT_KEYS = frozenset({"version", "defaults", "labels"})
_ENTRY_KEYS = frozenset({"prefix", "keep", "min_size"})


@dataclass(frozen=True)
class PolicyEntry:
    """Optional overrides for one label or for all labels."""

    prefix: str | None = None
    keep: int | None = None
    min_size: int | None = None


@dataclass(frozen=True)
class PolicyFile:
    """Validated policy-file root object."""

    version: int
    defaults: PolicyEntry = field(default_factory=PolicyEntry)
    labels: Mapping[str, PolicyEntry] = field(default_factory=dict)

    def entry_for(self, label: str) -> PolicyEntry:
        """Return the label entry, or an empty entry when absent."""
        return self.labels.get(label, PolicyEntry())


def load_policy_file(policy_path: str) -> PolicyFile:
    """Load and validate a YAML policy file from disk.

    Args:
        policy_path: File path to YAML policy file.

    Returns:
        Fully validated policy file.

    Raises:
        AutosnapDependencyError: If PyYAML is unavailable.
        AutosnapConfigError: If file is invalid or schema checks fail.
    """
    payload = _load_yaml_payload(policy_path)
    return parse_policy_payload(payload)


def parse_policy_payload(payload: object) -> PolicyFile:
    """Validate an already-decoded policy payload.

    Args:
        payload: Decoded YAML document.

    Returns:
        Validated policy file.
    """
    root_mapping = _expect_mapping(payload, "policy file root")
    unknown_keys = sorted(set(root_mapping) - _ROOT_KEYS)
    if unknown_keys:
        raise AutosnapConfigError(
            f"Unknown policy file keys {unknown_keys}. Allowed keys: {sorted(_ROOT_KEYS)}."
        )
    version = _parse_version(root_mapping)
    defaults = _parse_entry(root_mapping.get("defaults"), "defaults")
    raw_labels = root_mapping.get("labels")
    labels_mapping = _expect_mapping(raw_labels if raw_labels is not None else {}, "labels")
    labels = {
        label: _parse_entry(raw_entry, f"labels.{label}")
        for label, raw_entry in labels_mapping.items()
    }
    return PolicyFile(version=version, defaults=defaults, labels=labels)


def resolve_options(
    label: str,
    policy: PolicyFile | None,
    prefix: str | None = None,
    keep: int | None = None,
    min_size: int | None = None,
    dry_run: bool = False,
) -> AutosnapOptions:
    """Merge CLI values, policy file entries, and built-in defaults.

    Precedence is CLI value, then label entry, then file defaults.

    Args:
        label: Active retention label.
        policy: Optional loaded policy file.
        prefix: CLI prefix, ``None`` when not given.
        keep: CLI keep count, ``None`` when not given.
        min_size: CLI min size in KB, ``None`` when not given.
        dry_run: CLI dry-run flag.

    Returns:
        Unvalidated run options.
    """
    entries = (
        PolicyEntry(prefix=prefix, keep=keep, min_size=min_size),
        policy.entry_for(label) if policy else PolicyEntry(),
        policy.defaults if policy else PolicyEntry(),
        PolicyEntry(
            prefix=DEFAULT_SNAPSHOT_PREFIX,
            keep=DEFAULT_KEEP_COUNT,
            min_size=DEFAULT_MIN_SIZE_KB,
        ),
    )
    return AutosnapOptions(
        label=label,
        prefix=cast(str, _first_set(entry.prefix for entry in entries)),
        keep=cast(int, _first_set(entry.keep for entry in entries)),
        min_size_kb=cast(int, _first_set(entry.min_size for entry in entries)),
        dry_run=dry_run,
    )


def _first_set(values: Iterable[object]) -> object:
    for value in values:
        if value is not None:
            return value
    return None


def _load_yaml_payload(policy_path: str) -> object:
    try:
        import yaml  # type: ignore[import-untyped]
    except ImportError as error:  # pragma: no cover - dependency failure
        raise AutosnapDependencyError(
            "YAML policy files require PyYAML. Install with 'pip install pyyaml'."
        ) from error
    policy_file = Path(policy_path).expanduser().resolve()
    if not policy_file.exists():
        raise AutosnapConfigError(
            f"Policy file does not exist at {policy_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(policy_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise AutosnapConfigError(
            f"Failed to read policy file at {policy_file}: {error}. "
            "Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise AutosnapConfigError(
            f"Failed to parse YAML policy file at {policy_file}: {error}. "
            "Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise AutosnapConfigError(f"Policy file at {policy_file} is empty. Define 'version'.")
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise AutosnapConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise AutosnapConfigError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _parse_version(root_mapping: Mapping[str, object]) -> int:
    raw_version = root_mapping.get("version")
    if not isinstance(raw_version, int) or isinstance(raw_version, bool):
        raise AutosnapConfigError("Policy file field 'version' must be an integer. Set version: 1.")
    if raw_version != POLICY_FILE_VERSION:
        raise AutosnapConfigError(
            f"Unsupported policy file version {raw_version}. Use version: {POLICY_FILE_VERSION}."
        )
    return raw_version


def _parse_entry(value: object, context: str) -> PolicyEntry:
    entry_mapping = _expect_mapping(value if value is not None else {}, context)
    unknown_keys = sorted(set(entry_mapping) - _ENTRY_KEYS)
    if unknown_keys:
        raise AutosnapConfigError(
            f"Unknown keys {unknown_keys} in {context}. Allowed keys: {sorted(_ENTRY_KEYS)}."
        )
    prefix = entry_mapping.get("prefix")
    if prefix is not None and not isinstance(prefix, str):
        raise AutosnapConfigError(f"{context}.prefix must be a string.")
    return PolicyEntry(
        prefix=prefix,
        keep=_optional_non_negative_int(entry_mapping.get("keep"), f"{context}.keep"),
        min_size=_optional_non_negative_int(entry_mapping.get("min_size"), f"{context}.min_size"),
    )


def _optional_non_negative_int(value: object, context: str) -> int | None:
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise AutosnapConfigError(f"{context} must be a non-negative integer, got {value!r}.")
    return value
