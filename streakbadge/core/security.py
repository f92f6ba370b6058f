from fastapi import HTTPException
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer


bearer_scheme = HTTPBearer(auto_error=False)

MISSING_TOKEN_DETAIL = "Authorization Bearer token is required"


def require_github_token(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> str:
    """Dependency returning the GitHub token sent as a Bearer credential.

    Raises:
        HTTPException: 401 when the header is absent, not Bearer, or blank.
    """

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail=MISSING_TOKEN_DETAIL)

    token = credentials.credentials.strip()
    if not token:
        raise HTTPException(status_code=401, detail=MISSING_TOKEN_DETAIL)
    return token
