from pydantic import BaseModel


class AuthUser(BaseModel):
    id: int | str
    username: str
    rol: str
    email: str | None = None


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: AuthUser


class MeResponse(BaseModel):
    user: AuthUser


class AccountResponse(BaseModel):
    user: AuthUser


class AccountUpdateResponse(BaseModel):
    message: str = ""
    user: AuthUser


class MessageResponse(BaseModel):
    message: str = ""
