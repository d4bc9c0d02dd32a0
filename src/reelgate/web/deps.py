from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from reelgate.app import App
from reelgate.core.modules.session.models import SessionToken
from reelgate.errors import AuthenticationError

# Security schemes
bearer_scheme = HTTPBearer(auto_error=False, scheme_name="BearerAuth")


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_optional_session_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> SessionToken | None:
    """Extract the session token from the Authorization Bearer header, without validating it."""
    if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return SessionToken(credentials.credentials)
    return None


async def get_session_token(
    app: Annotated[App, Depends(get_app)],
    session_token: Annotated[SessionToken | None, Depends(get_optional_session_token)],
) -> SessionToken:
    """Get and validate session token from Authorization Bearer header."""
    if session_token is not None and await app.is_session_token_valid(session_token):
        return session_token
    raise AuthenticationError


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SessionTokenDep = Annotated[SessionToken, Depends(get_session_token)]
OptionalSessionTokenDep = Annotated[SessionToken | None, Depends(get_optional_session_token)]
