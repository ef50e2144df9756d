"""Commit and push the built site to its hosting branch.

Runs, in order::

    git status
    git add .
    git commit -m "Update build files"
    git push origin main

Exit codes of the individual steps are reported but never stop the
sequence, so the completion banner is always printed.

Usage
-----
::

    robocourse-deploy
    robocourse-deploy --dry-run
    python -m robocourse.deploy --message "Rebuild 2025 course"
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from robocourse.config import DeployConfig

_logger = logging.getLogger(__name__)

Runner = Callable[[list[str], Path | None], int]


def deploy_commands(config: DeployConfig) -> list[list[str]]:
    """The git invocations a deploy performs, in order."""
    return [
        ["git", "status"],
        ["git", "add", "."],
        ["git", "commit", "-m", config.message],
        ["git", "push", config.remote, config.branch],
    ]


def _run(cmd: list[str], cwd: Path | None) -> int:
    try:
        return subprocess.run(cmd, cwd=cwd, check=False).returncode
    except OSError as exc:
        _logger.error("Could not run %s: %s", cmd[0], exc)
        return 127


def run_deploy(
    config: DeployConfig,
    *,
    cwd: Path | None = None,
    dry_run: bool = False,
    runner: Runner | None = None,
) -> list[int]:
    """Run every deploy step and return their exit codes."""
    run = runner or _run
    codes: list[int] = []
    for cmd in deploy_commands(config):
        print("$", " ".join(cmd), flush=True)
        if dry_run:
            codes.append(0)
            continue
        code = run(cmd, cwd)
        if code != 0:
            _logger.warning("%s exited with status %d; continuing", " ".join(cmd[:2]), code)
        codes.append(code)
    return codes


def completion_banner(config: DeployConfig) -> str:
    return f"\nDeploy completed!\nSite: {config.site_url}\n"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Commit and push the built site.")
    parser.add_argument("--message", help='Commit message (default: "Update build files")')
    parser.add_argument("--remote", help="Remote to push to (default: origin)")
    parser.add_argument("--branch", help="Branch to push (default: main)")
    parser.add_argument("--site-url", help="URL printed after the deploy")
    parser.add_argument("--cwd", type=Path, default=None, help="Repository to deploy (default: current directory)")
    parser.add_argument("--dry-run", action="store_true", help="Print the commands without running them")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )

    config = DeployConfig.from_env(
        message=args.message,
        remote=args.remote,
        branch=args.branch,
        site_url=args.site_url,
    )
    run_deploy(config, cwd=args.cwd, dry_run=args.dry_run)
    print(completion_banner(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
