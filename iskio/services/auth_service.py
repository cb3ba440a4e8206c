import logging

from pydantic import ValidationError

from iskio.core.errors import ApiError, FormValidationError
from iskio.core.security import is_token_expired
from iskio.models.auth import AuthUser, LoginRequest, LoginResponse, MeResponse, MessageResponse
from iskio.services.api_client import ApiClient

logger = logging.getLogger(__name__)

SUPERADMIN_ROLE = "superadmin"
MIN_PASSWORD_LENGTH = 6


async def login(api: ApiClient, username: str, password: str, remember: bool = True) -> AuthUser:
    data = await api.post(
        "/login", json=LoginRequest(username=username, password=password).model_dump()
    )
    response = LoginResponse.model_validate(data)
    api.session.set_remember_session(remember)
    api.session.set_access_token(response.token, persist=remember)
    api.session.set_stored_user(response.user, persist=remember)
    logger.info("Logged in as %s (remember=%s)", response.user.username, remember)
    return response.user


async def logout(api: ApiClient) -> None:
    try:
        await api.post("/logout")
    finally:
        api.session.clear_auth_storage()


async def refresh_user(api: ApiClient) -> AuthUser:
    data = await api.get("/me")
    user = MeResponse.model_validate(data).user
    api.session.set_stored_user(user, persist=api.session.is_persistent())
    return user


async def restore_session(api: ApiClient) -> AuthUser | None:
    """Startup check: drop an expired or rejected session, otherwise reload the user."""
    token = api.session.get_access_token()
    if not token:
        api.session.clear_auth_storage()
        return None
    if is_token_expired(token):
        logger.info("Stored session expired")
        api.session.clear_auth_storage()
        return None
    try:
        return await refresh_user(api)
    except (ApiError, ValidationError) as e:
        logger.info("Could not restore session: %s", e)
        api.session.clear_auth_storage()
        return None


def has_role(user: AuthUser | None, required: str | None = None) -> bool:
    if user is None:
        return False
    if not required:
        return True
    return user.rol == required or user.rol == SUPERADMIN_ROLE


async def request_password_reset(api: ApiClient, email: str) -> str:
    data = await api.post("/forgot-password", json={"email": email.strip()})
    return MessageResponse.model_validate(data or {}).message


def validate_new_password(token: str | None, password: str, confirm: str) -> None:
    if not token:
        raise FormValidationError("El enlace no es valido o falta el token.")
    if len(password.strip()) < MIN_PASSWORD_LENGTH:
        raise FormValidationError(
            f"La contrasena debe tener al menos {MIN_PASSWORD_LENGTH} caracteres."
        )
    if password != confirm:
        raise FormValidationError("Las contrasenas no coinciden.")


async def reset_password(api: ApiClient, token: str | None, password: str, confirm: str) -> str:
    validate_new_password(token, password, confirm)
    data = await api.post(
        "/reset-password", json={"token": token, "password": password.strip()}
    )
    return MessageResponse.model_validate(data or {}).message
