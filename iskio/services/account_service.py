from iskio.core.errors import FormValidationError
from iskio.models.auth import AccountResponse, AccountUpdateResponse, AuthUser
from iskio.services.api_client import ApiClient


async def get_account(api: ApiClient) -> AuthUser:
    data = await api.get("/account")
    return AccountResponse.model_validate(data).user


def build_account_update(
    account: AuthUser | None,
    current_password: str,
    email: str,
    new_password: str = "",
    confirm_password: str = "",
) -> dict:
    """Validate the account form and return only the fields that changed."""
    if not current_password.strip():
        raise FormValidationError("Debes ingresar tu contrasena actual.")

    trimmed_email = email.strip()
    current_email = (account.email if account else None) or ""
    wants_email_change = trimmed_email != current_email
    wants_password_change = new_password.strip() != ""

    if not wants_email_change and not wants_password_change:
        raise FormValidationError("No hay cambios para actualizar.")
    if wants_email_change and not trimmed_email:
        raise FormValidationError("Debes ingresar un correo valido.")
    if wants_password_change and new_password != confirm_password:
        raise FormValidationError("Las nuevas contrasenas no coinciden.")

    payload = {"current_password": current_password.strip()}
    if wants_email_change:
        payload["email"] = trimmed_email
    if wants_password_change:
        payload["new_password"] = new_password.strip()
    return payload


async def update_account(
    api: ApiClient,
    account: AuthUser | None,
    current_password: str,
    email: str,
    new_password: str = "",
    confirm_password: str = "",
) -> AuthUser:
    payload = build_account_update(
        account, current_password, email, new_password, confirm_password
    )
    data = await api.put("/account", json=payload)
    return AccountUpdateResponse.model_validate(data).user
