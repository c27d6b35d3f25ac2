"""Comment templates posted on pull requests."""

RETARGET_COMMENT = """
Hi @{username}! 🎉

We've created a branch called `{user_branch}` for you based on `{base_branch}`.

Please update the **base branch** of this pull request from `{base_branch}` to `{user_branch}` to proceed with testing and reviews.

Thanks for contributing! 🚀
"""


def render_retarget_comment(username: str, user_branch: str, base_branch: str) -> str:
    """Return the comment asking ``username`` to change the PR base to ``user_branch``."""
    return RETARGET_COMMENT.format(
        username=username,
        user_branch=user_branch,
        base_branch=base_branch,
    )
