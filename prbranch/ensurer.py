"""Ensure a per-contributor branch exists and ask the contributor to retarget
their pull request onto it.

Flow for one event:
- no pull request in the payload: log and stop
- ``heads/<login>/<suffix>`` exists: keep it
- it does not exist: create ``refs/heads/<login>/<suffix>`` at the base branch head
- in both branch cases: post the retarget comment on the pull request
"""

import logging

from prbranch.adapters.base import (
    GitPlatformAdapter,
    GitPlatformError,
    RefFound,
    RefLookupFailed,
    RefNotFound,
)
from prbranch.models import EnsureOutcome, PullRequestEvent, RepositoryCoordinates
from prbranch.templates import render_retarget_comment

DEFAULT_BASE_BRANCH = "main"
DEFAULT_BRANCH_SUFFIX = "ratatui"


def user_branch_name(username: str, suffix: str = DEFAULT_BRANCH_SUFFIX) -> str:
    """Branch name for a contributor, e.g. ``alice/ratatui``."""
    return f"{username}/{suffix}"


class BranchEnsurer:
    """Creates the contributor branch off the base branch and posts the
    retarget comment."""

    def __init__(
        self,
        adapter: GitPlatformAdapter,
        log: logging.Logger | None = None,
        base_branch: str = DEFAULT_BASE_BRANCH,
        branch_suffix: str = DEFAULT_BRANCH_SUFFIX,
    ) -> None:
        self._adapter = adapter
        self._log = log or logging.getLogger("prbranch.ensurer")
        self._base_branch = base_branch
        self._branch_suffix = branch_suffix

    def run(self, event: PullRequestEvent, repo: RepositoryCoordinates) -> EnsureOutcome:
        """Handle one pull request event.

        Raises GitPlatformError when any remote call fails, except a 404
        on the contributor branch lookup, which triggers creation.
        """
        pr = event.pull_request
        if pr is None:
            self._log.info("No pull request found.")
            return EnsureOutcome(status="skipped")

        username = pr.user.login
        user_branch = user_branch_name(username, self._branch_suffix)

        lookup = self._adapter.get_ref(repo, f"heads/{user_branch}")
        if isinstance(lookup, RefLookupFailed):
            raise lookup.error
        if isinstance(lookup, RefFound):
            self._log.info("Branch %s already exists.", user_branch)
            status = "existing"
        else:
            self._log.info("Branch %s does not exist. Creating branch...", user_branch)
            self._create_from_base(repo, user_branch)
            status = "created"

        # Posted on every run, also when the branch was already there.
        body = render_retarget_comment(username, user_branch, self._base_branch)
        comment = self._adapter.create_comment(repo, pr.number, body)
        self._log.debug("Posted retarget comment on %s#%s", repo.slug, pr.number)
        return EnsureOutcome(status=status, branch=user_branch, comment=comment)

    def _create_from_base(self, repo: RepositoryCoordinates, user_branch: str) -> None:
        base = self._adapter.get_ref(repo, f"heads/{self._base_branch}")
        if isinstance(base, RefLookupFailed):
            raise base.error
        if isinstance(base, RefNotFound):
            raise GitPlatformError(
                f"404: base branch {self._base_branch} not found in {repo.slug}",
                status_code=404,
            )
        self._adapter.create_ref(repo, f"refs/heads/{user_branch}", base.sha)
        self._log.info("Created branch %s from %s.", user_branch, self._base_branch)
