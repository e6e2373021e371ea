from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from nomonic.config import ConfigError, load_config
from nomonic.hooks import HookStatus, install_pre_commit_hook
from nomonic.report import render_clean, render_json, render_violations
from nomonic.scanner import scan_repository, scan_staged

logger = logging.getLogger(__name__)

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="nomonic", description="Detect BIP39 seed phrases before they are committed")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="Scan tracked files (or a directory) for seed phrases")
    mode = scan.add_mutually_exclusive_group()
    mode.add_argument("--git", dest="mode", action="store_const", const="git",
                      help="Scan files tracked by the current git repository (default)")
    mode.add_argument("--dir", dest="directory", default=None,
                      help="Scan this directory instead; its own .nomonicignore applies")
    scan.add_argument("--threshold", type=int, default=None, help="Minimum consecutive BIP39 words to flag")
    scan.add_argument("--json", dest="json_output", action="store_true", default=None,
                      help="Write violations as a JSON array to stdout")
    scan.add_argument("--ignore", dest="ignore_patterns", action="append", default=None,
                      metavar="PATTERN", help="Extra glob pattern to skip (repeatable)")
    scan.add_argument("--include-lockfiles", dest="include_lockfiles", action="store_true", default=None,
                      help="Also scan lockfiles such as package-lock.json")

    staged = sub.add_parser("check-staged", help="Check lines added in the git index (pre-commit mode)")
    staged.add_argument("--threshold", type=int, default=None, help="Minimum consecutive BIP39 words to flag")

    hook = sub.add_parser("install-hook", help="Install the pre-commit hook")
    hook.add_argument("--repo", default=".", help="Repository root (default: current directory)")
    return p


def _cmd_scan(args: argparse.Namespace) -> int:
    root = Path(args.directory) if args.directory else None
    if root is not None and not root.is_dir():
        logger.error(f"Not a directory: {root}")
        return EXIT_ERROR

    config = load_config(
        root or ".",
        threshold=args.threshold,
        json_output=args.json_output,
        ignore_patterns=args.ignore_patterns,
        include_lockfiles=args.include_lockfiles,
    )
    violations = scan_repository(config, root)

    if config.json_output:
        sys.stdout.write(render_json(violations))
    elif violations:
        sys.stderr.write(render_violations(violations))
    else:
        sys.stderr.write(render_clean())
    return EXIT_VIOLATIONS if violations else EXIT_CLEAN


def _cmd_check_staged(args: argparse.Namespace) -> int:
    config = load_config(".", threshold=args.threshold)
    violations = scan_staged(config)
    if violations:
        sys.stderr.write(render_violations(violations, blocked=True))
        return EXIT_VIOLATIONS
    sys.stderr.write(render_clean(staged=True))
    return EXIT_CLEAN


def _cmd_install_hook(args: argparse.Namespace) -> int:
    try:
        status = install_pre_commit_hook(args.repo)
    except FileNotFoundError as e:
        logger.error(str(e))
        return EXIT_ERROR
    messages = {
        HookStatus.CREATED: "Created .git/hooks/pre-commit with BIP39 check",
        HookStatus.PREPENDED: "Added BIP39 check to existing .git/hooks/pre-commit",
        HookStatus.ALREADY_PRESENT: "BIP39 check already in pre-commit hook",
        HookStatus.SYMLINK_SKIPPED: "pre-commit hook is a symlink; add 'nomonic check-staged' to it manually",
    }
    print(messages[status])
    return EXIT_CLEAN


_COMMANDS = {
    "scan": _cmd_scan,
    "check-staged": _cmd_check_staged,
    "install-hook": _cmd_install_hook,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    try:
        return _COMMANDS[args.command](args)
    except ConfigError as e:
        logger.error(str(e))
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
