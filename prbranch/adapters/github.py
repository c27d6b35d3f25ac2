"""GitHub API adapter."""

from typing import Any, Dict

import requests

from prbranch.adapters.base import (
    GitPlatformAdapter,
    GitPlatformError,
    RefFound,
    RefLookup,
    RefLookupFailed,
    RefNotFound,
)
from prbranch.models import Comment, Ref, RepositoryCoordinates


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    return Comment(
        id=data["id"],
        body=data.get("body") or "",
        author=user.get("login", ""),
        html_url=data.get("html_url"),
    )


def _ref_from_api(data: Dict[str, Any]) -> Ref:
    obj = data.get("object") or {}
    return Ref(ref=data.get("ref", ""), sha=obj.get("sha", ""))


def _error_from_response(resp: requests.Response) -> GitPlatformError:
    msg = resp.text or resp.reason or str(resp.status_code)
    try:
        msg = resp.json().get("message", msg)
    except Exception:
        pass
    return GitPlatformError(f"{resp.status_code}: {msg}", status_code=resp.status_code)


class GitHubAdapter(GitPlatformAdapter):
    """GitHub API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com") -> None:
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _send(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            return self._session.request(method, url, json=json, timeout=30)
        except requests.RequestException as e:
            raise GitPlatformError(f"{method} {path} failed: {e}") from e

    def _request(
        self,
        method: str,
        path: str,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        resp = self._send(method, path, json=json)
        if resp.status_code >= 400:
            raise _error_from_response(resp)
        return resp

    def get_ref(self, repo: RepositoryCoordinates, ref: str) -> RefLookup:
        try:
            resp = self._send("GET", f"/repos/{repo.slug}/git/ref/{ref}")
        except GitPlatformError as e:
            return RefLookupFailed(ref=ref, error=e)
        if resp.status_code == 404:
            return RefNotFound(ref=ref)
        if resp.status_code >= 400:
            return RefLookupFailed(ref=ref, error=_error_from_response(resp))
        try:
            sha = resp.json()["object"]["sha"]
        except (ValueError, TypeError, KeyError):
            # Non-JSON body, or a list when ref is only a prefix of existing refs
            return RefLookupFailed(
                ref=ref,
                error=GitPlatformError(
                    f"{resp.status_code}: unexpected ref payload",
                    status_code=resp.status_code,
                ),
            )
        return RefFound(ref=ref, sha=sha)

    def create_ref(self, repo: RepositoryCoordinates, ref: str, sha: str) -> Ref:
        resp = self._request(
            "POST",
            f"/repos/{repo.slug}/git/refs",
            json={"ref": ref, "sha": sha},
        )
        return _ref_from_api(resp.json() or {})

    def create_comment(self, repo: RepositoryCoordinates, issue_number: int, body: str) -> Comment:
        resp = self._request(
            "POST",
            f"/repos/{repo.slug}/issues/{issue_number}/comments",
            json={"body": body},
        )
        return _comment_from_api(resp.json())

    def close(self) -> None:
        self._session.close()
