"""Autosnap CLI entry point.

This module parses the command line, configures logging, and maps the
run result onto a process exit code.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from core.config import AutosnapConfig
from core.constants import (
    DEFAULT_KEEP_COUNT,
    DEFAULT_MIN_SIZE_KB,
    DEFAULT_SNAPSHOT_PREFIX,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    EXIT_USAGE,
)
from core.errors import (
    AutosnapCommandError,
    AutosnapConfigError,
    AutosnapDependencyError,
    AutosnapInventoryError,
)
from core.logging_config import configure_logging, get_logger, resolve_log_level
from core.policy_file import PolicyFile, load_policy_file, resolve_options
from core.types import AutosnapOptions, PlanResult, VolumeManager
from execution.autosnap_runner import run_autosnap
from inventory.zfs_command import ZfsCommandRunner

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="autosnap",
        description="Create and prune labelled zfs snapshots.",
    )
    parser.add_argument("label", metavar="LABEL", help="Snapshot label, e.g. hourly or daily")
    parser.add_argument(
        "-m",
        "--min-size",
        type=int,
        help=(
            "Create a snapshot only while the last one is smaller than this many KB "
            f"(default {DEFAULT_MIN_SIZE_KB}, always create)"
        ),
    )
    parser.add_argument(
        "-k",
        "--keep",
        type=int,
        help=f"Keep NUM recent snapshots and destroy older ones (default {DEFAULT_KEEP_COUNT})",
    )
    parser.add_argument(
        "-p",
        "--prefix",
        help=f"Prefix of snapshot names (default {DEFAULT_SNAPSHOT_PREFIX})",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Print actions without actually doing anything",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print info messages")
    parser.add_argument("-d", "--debug", action="store_true", help="Print debug messages")
    parser.add_argument("--config", help="Optional YAML policy file with per-label defaults")
    return parser


def main(argv: Sequence[str] | None = None, volume_manager: VolumeManager | None = None) -> int:
    """Run the autosnap CLI.

    Args:
        argv: Optional argument vector.
        volume_manager: Optional collaborator, zfs is used when omitted.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(resolve_log_level(args.verbose, args.debug))
    try:
        options = _build_options(args)
        if volume_manager is None:
            volume_manager = ZfsCommandRunner(AutosnapConfig.from_env())
        result = run_autosnap(options, volume_manager)
    except (AutosnapConfigError, AutosnapDependencyError) as error:
        print(f"autosnap: error: {error}", file=sys.stderr)
        return EXIT_USAGE
    except (AutosnapCommandError, AutosnapInventoryError) as error:
        _LOGGER.error("autosnap_run_aborted", reason=str(error))
        print(f"autosnap: error: {error}", file=sys.stderr)
        return EXIT_FAILURE
    if options.dry_run or args.verbose or args.debug:
        _print_summary(result, options.dry_run)
    return EXIT_FAILURE if result.has_failures else EXIT_SUCCESS


def _build_options(args: argparse.Namespace) -> AutosnapOptions:
    """Merge CLI flags with the optional policy file.

    Args:
        args: Parsed CLI args.

    Returns:
        Run options; validation happens in the runner.
    """
    policy: PolicyFile | None = load_policy_file(args.config) if args.config else None
    return resolve_options(
        args.label,
        policy,
        prefix=args.prefix,
        keep=args.keep,
        min_size=args.min_size,
        dry_run=args.dry_run,
    )


def _print_summary(result: PlanResult, dry_run: bool) -> None:
    if dry_run:
        create_key, destroy_key = "would_create", "would_destroy"
    else:
        create_key, destroy_key = "created", "destroyed"
    print(f"{create_key}={result.creates_succeeded}")
    print(f"create_failed={result.creates_failed}")
    print(f"{destroy_key}={result.destroys_succeeded}")
    print(f"destroy_failed={result.destroys_failed}")
    print(f"already_absent={result.destroys_missing}")
    for failure in result.failures:
        print(f"failed\t{failure.action.kind}\t{failure.action.snapshot_name}\t{failure.reason}")
