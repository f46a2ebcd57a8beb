import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from scheduling.auth import jwt_handler
from scheduling.core.errors import AuthenticationError

security = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> int:
    if credentials is None:
        raise AuthenticationError("Token not provided")

    try:
        return jwt_handler.decode_user_id(credentials.credentials)
    except (jwt.PyJWTError, ValueError) as exc:
        raise AuthenticationError("Token invalid") from exc
