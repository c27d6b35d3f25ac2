"""Data models for the pull request event, repository, refs and comments
(Pydantic)."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Account that opened the pull request."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    login: str


class PullRequest(BaseModel):
    """The ``pull_request`` object of a webhook payload (only the fields we
    read)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    number: int
    user: User


class RepositoryInfo(BaseModel):
    """The ``repository`` object of a webhook payload."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    full_name: str | None = None


class PullRequestEvent(BaseModel):
    """Event payload handed over by the runner.

    ``pull_request`` is None when the triggering event is not a pull
    request event.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    action: str | None = None
    pull_request: PullRequest | None = None
    repository: RepositoryInfo | None = None


class RepositoryCoordinates(BaseModel):
    """Owner and name of the target repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str

    @property
    def slug(self) -> str:
        """``owner/repo`` as used in API paths."""
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_slug(cls, slug: str) -> "RepositoryCoordinates":
        """Parse ``owner/repo``."""
        owner, sep, repo = slug.strip().partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise ValueError(f"Invalid repository slug: {slug!r} (expected owner/repo)")
        return cls(owner=owner, repo=repo)


class Ref(BaseModel):
    """Named pointer to a commit."""

    model_config = ConfigDict(frozen=True)

    ref: str
    sha: str


class Comment(BaseModel):
    """Comment on an issue or PR."""

    id: int
    body: str
    author: str = ""
    html_url: str | None = None


class EnsureOutcome(BaseModel):
    """What a single BranchEnsurer run did."""

    status: Literal["skipped", "existing", "created"]
    branch: str | None = None
    comment: Comment | None = None
