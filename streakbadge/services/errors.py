class MalformedDateError(ValueError):
    """Raised when a contribution day is not an ISO `YYYY-MM-DD` date."""


class MissingGitHubTokenError(Exception):
    """Raised when a GitHub token is required but none was configured."""


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""
