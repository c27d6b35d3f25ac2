"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import Union

from pydantic import BaseModel, ConfigDict

from prbranch.models import Comment, Ref, RepositoryCoordinates


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class RefFound(BaseModel):
    """Ref lookup succeeded."""

    model_config = ConfigDict(frozen=True)

    ref: str
    sha: str


class RefNotFound(BaseModel):
    """Ref lookup answered 404."""

    model_config = ConfigDict(frozen=True)

    ref: str


class RefLookupFailed(BaseModel):
    """Ref lookup failed for any other reason; ``error`` is the original
    failure."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ref: str
    error: GitPlatformError


RefLookup = Union[RefFound, RefNotFound, RefLookupFailed]


class GitPlatformAdapter(ABC):
    """Abstract interface for Git hosting platforms."""

    @abstractmethod
    def get_ref(self, repo: RepositoryCoordinates, ref: str) -> RefLookup:
        """Look up ``ref`` (e.g. ``heads/main``).

        Never raises for API errors: the outcome is returned.
        """
        ...

    @abstractmethod
    def create_ref(self, repo: RepositoryCoordinates, ref: str, sha: str) -> Ref:
        """Create ``ref`` (e.g. ``refs/heads/feature``) pointing at ``sha``."""
        ...

    @abstractmethod
    def create_comment(self, repo: RepositoryCoordinates, issue_number: int, body: str) -> Comment:
        """Post a comment on an issue or pull request."""
        ...

    def close(self) -> None:
        """Release network resources. Override if needed."""
        return None

    def __enter__(self) -> "GitPlatformAdapter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
