"""prbranch entry point.

Runs as a workflow step on pull_request events: ensures the contributor
branch exists and posts the retarget comment.
Usage: prbranch [--config config.yaml] [--event event.json] [--repository owner/repo]
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from prbranch.adapters import GitHubAdapter, GitPlatformError
from prbranch.config import load_config
from prbranch.ensurer import BranchEnsurer
from prbranch.event import event_path_from_env, load_event, resolve_repository
from prbranch.logging import LEVEL_NAMES, setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="prbranch",
        description="Create <login>/<suffix> for a pull request author and ask them to retarget the PR",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--event",
        "-e",
        type=Path,
        default=None,
        help="Path to the event JSON (default: $GITHUB_EVENT_PATH)",
    )
    parser.add_argument(
        "--repository",
        "-r",
        default=None,
        help="Target repository owner/repo (default: $GITHUB_REPOSITORY)",
    )
    parser.add_argument(
        "--log-level",
        choices=LEVEL_NAMES,
        type=str.upper,
        default=None,
        help="Override logging.level from config",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    args = parse_args(argv)
    config = load_config(args.config)
    setup_logging(config.logging, args.log_level)
    log = logging.getLogger("prbranch.main")

    if args.check:
        print("Config OK:", config.github.api_url, f"{config.branch.base} -> <login>/{config.branch.suffix}")
        return 0

    env = os.environ
    event_path = args.event or event_path_from_env(env)
    if event_path is None:
        log.error("No event file: pass --event or set GITHUB_EVENT_PATH")
        return 2
    try:
        event = load_event(event_path)
    except (OSError, ValueError) as e:
        log.error("Cannot read event file %s: %s", event_path, e)
        return 2
    if event.pull_request is None:
        log.info("No pull request found.")
        return 0
    try:
        repo = resolve_repository(args.repository, env, event)
    except ValueError as e:
        log.error("Invalid repository: %s", e)
        return 2
    if repo is None:
        log.error("No repository: pass --repository or set GITHUB_REPOSITORY")
        return 2

    token = config.github_token_resolved
    if not token:
        log.error("No GitHub token; set GITHUB_TOKEN or GITHUB_TOKEN_FILE")
        return 2

    with GitHubAdapter(token=token, api_url=config.github.api_url) as adapter:
        ensurer = BranchEnsurer(
            adapter,
            log=logging.getLogger("prbranch.ensurer"),
            base_branch=config.branch.base,
            branch_suffix=config.branch.suffix,
        )
        try:
            outcome = ensurer.run(event, repo)
        except GitPlatformError as e:
            log.error("GitHub API call failed (status=%s): %s", e.status_code, e)
            return 1

    log.info("Done | repo=%s | status=%s | branch=%s", repo.slug, outcome.status, outcome.branch)
    return 0


if __name__ == "__main__":
    sys.exit(main())
