import jwt
import pytest
from fastapi.security import HTTPAuthorizationCredentials

from scheduling.auth import jwt_handler
from scheduling.auth.dependencies import get_current_user_id
from scheduling.core import config
from scheduling.core.errors import AuthenticationError


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)


def _token_with_subject(subject) -> str:
    payload = {} if subject is None else {'sub': subject}
    return jwt.encode(payload, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def test_create_access_token_stores_user_id_as_subject() -> None:
    token = jwt_handler.create_access_token(user_id=42)

    payload = jwt_handler.decode_access_token(token)

    assert payload['sub'] == '42'
    assert payload['exp'] > payload['iat']


def test_decode_user_id_returns_integer_id() -> None:
    assert jwt_handler.decode_user_id(jwt_handler.create_access_token(user_id=7)) == 7


def test_get_current_user_id_returns_subject_as_int() -> None:
    token = jwt_handler.create_access_token(user_id=42)

    assert get_current_user_id(_bearer(token)) == 42


def test_get_current_user_id_requires_token() -> None:
    with pytest.raises(AuthenticationError) as exception_info:
        get_current_user_id(None)

    assert exception_info.value.status_code == 401
    assert exception_info.value.message == 'Token not provided'


def test_get_current_user_id_rejects_invalid_token() -> None:
    with pytest.raises(AuthenticationError) as exception_info:
        get_current_user_id(_bearer('not-a-jwt'))

    assert exception_info.value.message == 'Token invalid'


def test_get_current_user_id_rejects_expired_token() -> None:
    token = jwt_handler.create_access_token(user_id=42, expires_minutes=-1)

    with pytest.raises(AuthenticationError):
        get_current_user_id(_bearer(token))


@pytest.mark.parametrize('subject', ['someone@example.com', None])
def test_get_current_user_id_rejects_token_without_numeric_subject(subject) -> None:
    with pytest.raises(AuthenticationError) as exception_info:
        get_current_user_id(_bearer(_token_with_subject(subject)))

    assert exception_info.value.message == 'Token invalid'
