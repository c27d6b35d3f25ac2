"""Unit tests for GitHub adapter (mocked API)."""

from unittest.mock import Mock, patch

import pytest
import requests

from prbranch.adapters.base import GitPlatformError, RefFound, RefLookupFailed, RefNotFound
from prbranch.adapters.github import GitHubAdapter
from prbranch.models import Comment, Ref, RepositoryCoordinates

REPO = RepositoryCoordinates(owner="owner", repo="repo")


@pytest.fixture
def adapter() -> GitHubAdapter:
    return GitHubAdapter(token="test-token", api_url="https://api.github.com")


def _response(status_code: int, data: object = None, text: str = "") -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.text = text
    resp.reason = ""
    resp.json.return_value = data
    return resp


def test_session_headers(adapter: GitHubAdapter) -> None:
    """Token and Accept header are set on the session."""
    assert adapter._session.headers["Authorization"] == "token test-token"
    assert adapter._session.headers["Accept"] == "application/vnd.github.v3+json"


def test_get_ref_found(adapter: GitHubAdapter) -> None:
    """get_ref returns RefFound with the sha when API returns 200."""
    mock_resp = _response(200, {"ref": "refs/heads/main", "object": {"sha": "abc123", "type": "commit"}})

    with patch.object(adapter._session, "request", return_value=mock_resp) as req:
        result = adapter.get_ref(REPO, "heads/main")

    assert result == RefFound(ref="heads/main", sha="abc123")
    call_args = req.call_args
    assert call_args[0][0] == "GET"
    assert call_args[0][1] == "https://api.github.com/repos/owner/repo/git/ref/heads/main"
    assert call_args[1].get("timeout") == 30


def test_get_ref_404_is_not_found(adapter: GitHubAdapter) -> None:
    """get_ref returns RefNotFound instead of raising on 404."""
    mock_resp = _response(404, {"message": "Not Found"}, text="Not Found")

    with patch.object(adapter._session, "request", return_value=mock_resp) as req:
        result = adapter.get_ref(REPO, "heads/alice/ratatui")

    assert isinstance(result, RefNotFound)
    assert result.ref == "heads/alice/ratatui"
    assert req.call_args[0][1].endswith("/repos/owner/repo/git/ref/heads/alice/ratatui")


def test_get_ref_other_error_is_failed(adapter: GitHubAdapter) -> None:
    """get_ref wraps non-404 errors into RefLookupFailed with status."""
    mock_resp = _response(403, {"message": "API rate limit exceeded"}, text="Forbidden")

    with patch.object(adapter._session, "request", return_value=mock_resp):
        result = adapter.get_ref(REPO, "heads/main")

    assert isinstance(result, RefLookupFailed)
    assert isinstance(result.error, GitPlatformError)
    assert result.error.status_code == 403
    assert "rate limit" in str(result.error).lower()


def test_get_ref_transport_error_is_failed(adapter: GitHubAdapter) -> None:
    """Connection errors become RefLookupFailed without status code."""
    with patch.object(adapter._session, "request", side_effect=requests.ConnectionError("boom")):
        result = adapter.get_ref(REPO, "heads/main")

    assert isinstance(result, RefLookupFailed)
    assert result.error.status_code is None
    assert not result.error.is_not_found


def test_get_ref_prefix_match_list_is_failed(adapter: GitHubAdapter) -> None:
    """A 200 with a list of refs (prefix match) is a failed lookup, not a crash."""
    mock_resp = _response(200, [{"ref": "refs/heads/main-old", "object": {"sha": "abc123"}}])

    with patch.object(adapter._session, "request", return_value=mock_resp):
        result = adapter.get_ref(REPO, "heads/main")

    assert isinstance(result, RefLookupFailed)
    assert result.error.status_code == 200
    assert "unexpected ref payload" in str(result.error)


def test_get_ref_non_json_body_is_failed(adapter: GitHubAdapter) -> None:
    """A 200 with an HTML body (proxy page) is a failed lookup."""
    mock_resp = _response(200, text="<html>proxy</html>")
    mock_resp.json.side_effect = ValueError("not json")

    with patch.object(adapter._session, "request", return_value=mock_resp):
        result = adapter.get_ref(REPO, "heads/main")

    assert isinstance(result, RefLookupFailed)
    assert result.error.status_code == 200


def test_get_ref_missing_object_is_failed(adapter: GitHubAdapter) -> None:
    mock_resp = _response(200, {"ref": "refs/heads/main"})

    with patch.object(adapter._session, "request", return_value=mock_resp):
        result = adapter.get_ref(REPO, "heads/main")

    assert isinstance(result, RefLookupFailed)


def test_create_ref_success(adapter: GitHubAdapter) -> None:
    """create_ref POSTs ref and sha to git/refs."""
    mock_resp = _response(201, {"ref": "refs/heads/alice/ratatui", "object": {"sha": "abc123"}})

    with patch.object(adapter._session, "request", return_value=mock_resp) as req:
        ref = adapter.create_ref(REPO, "refs/heads/alice/ratatui", "abc123")

    assert ref == Ref(ref="refs/heads/alice/ratatui", sha="abc123")
    call_args = req.call_args
    assert call_args[0][0] == "POST"
    assert call_args[0][1] == "https://api.github.com/repos/owner/repo/git/refs"
    assert call_args[1].get("json") == {"ref": "refs/heads/alice/ratatui", "sha": "abc123"}


def test_create_ref_conflict_raises(adapter: GitHubAdapter) -> None:
    """create_ref raises GitPlatformError when the ref already exists."""
    mock_resp = _response(422, {"message": "Reference already exists"}, text="Unprocessable Entity")

    with patch.object(adapter._session, "request", return_value=mock_resp):
        with pytest.raises(GitPlatformError) as exc_info:
            adapter.create_ref(REPO, "refs/heads/alice/ratatui", "abc123")
    assert exc_info.value.status_code == 422
    assert "Reference already exists" in str(exc_info.value)


def test_error_message_falls_back_to_text(adapter: GitHubAdapter) -> None:
    """When the body is not JSON, the response text is used."""
    mock_resp = _response(500, text="Internal Server Error")
    mock_resp.json.side_effect = ValueError("not json")

    with patch.object(adapter._session, "request", return_value=mock_resp):
        with pytest.raises(GitPlatformError) as exc_info:
            adapter.create_ref(REPO, "refs/heads/x", "abc")
    assert str(exc_info.value) == "500: Internal Server Error"


def test_create_comment_success(adapter: GitHubAdapter) -> None:
    """create_comment returns Comment when API returns 201."""
    response_data = {
        "id": 42,
        "body": "Hello",
        "html_url": "https://github.com/owner/repo/pull/7#issuecomment-42",
        "user": {"login": "github-actions[bot]"},
    }
    mock_resp = _response(201, response_data)

    with patch.object(adapter._session, "request", return_value=mock_resp) as req:
        comment = adapter.create_comment(REPO, 7, "Hello")

    assert isinstance(comment, Comment)
    assert comment.id == 42
    assert comment.body == "Hello"
    assert comment.author == "github-actions[bot]"
    assert req.call_args[0][1] == "https://api.github.com/repos/owner/repo/issues/7/comments"
    assert req.call_args[1].get("json") == {"body": "Hello"}


def test_create_comment_error_raises(adapter: GitHubAdapter) -> None:
    """create_comment raises GitPlatformError on API error."""
    mock_resp = _response(404, {"message": "Not Found"}, text="Not Found")

    with patch.object(adapter._session, "request", return_value=mock_resp):
        with pytest.raises(GitPlatformError) as exc_info:
            adapter.create_comment(REPO, 7, "Hello")
    assert exc_info.value.is_not_found


def test_api_url_trailing_slash_stripped() -> None:
    """Custom API URL (GHE) is used without a double slash."""
    adapter = GitHubAdapter(token="t", api_url="https://ghe.example.com/api/v3/")
    mock_resp = _response(404)
    with patch.object(adapter._session, "request", return_value=mock_resp) as req:
        adapter.get_ref(REPO, "heads/main")
    assert req.call_args[0][1] == "https://ghe.example.com/api/v3/repos/owner/repo/git/ref/heads/main"


def test_context_manager_closes_session(adapter: GitHubAdapter) -> None:
    with patch.object(adapter._session, "close") as close:
        with adapter:
            pass
    close.assert_called_once()
