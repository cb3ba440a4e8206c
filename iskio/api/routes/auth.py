import logging

from fastapi import APIRouter, Depends, HTTPException, status

from iskio.api.deps import get_current_user, get_store
from iskio.api.store import Store
from iskio.core.security import create_access_token, verify_password
from iskio.models.auth import AuthUser, LoginRequest, LoginResponse, MeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, store: Store = Depends(get_store)) -> LoginResponse:
    row = store.find_user(body.username)
    if not row or not verify_password(body.password, row[1]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales invalidas",
        )
    user = row[0]
    logger.info("Login ok for %s", user.username)
    return LoginResponse(success=True, token=create_access_token(user.id), user=user)


@router.get("/me", response_model=MeResponse)
async def me(current_user: AuthUser = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=current_user)


@router.post("/logout")
async def logout(current_user: AuthUser = Depends(get_current_user)) -> dict:
    logger.info("Logout for %s", current_user.username)
    return {"success": True}
