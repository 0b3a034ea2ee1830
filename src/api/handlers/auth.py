from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from src.api.error import raise_for_error
from src.app.use_cases.auth import (
    ChangeCoercionPasswordUseCase,
    ChangePasswordCommand,
    ChangePasswordUseCase,
    LoginCommand,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    MessageResponse,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    ValidatePasswordResponse,
    ValidatePasswordUseCase,
)
from .context import ActionContext


class LoginRequest(BaseModel):
    """
    loginCustomizado payload

    tipo_acao = "desinstalacao" records an uninstall event.
    """

    email: EmailStr = Field(..., description="User email address")
    senha: str = Field(..., min_length=1, description="Normal or coercion password")
    tipo_acao: Optional[str] = None


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="128-char refresh token")


class LogoutRequest(BaseModel):
    device_id: str = Field(..., min_length=1)


class ValidatePasswordRequest(BaseModel):
    senha: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    senha_atual: str = Field(..., min_length=1)
    nova_senha: str = Field(..., description="New password (min 6 chars)")


async def login(ctx: ActionContext) -> LoginResponse:
    request = LoginRequest.model_validate(ctx.body)
    result = await LoginUseCase(ctx.uow).execute(
        LoginCommand(
            email=request.email,
            password=request.senha,
            ip_address=ctx.ip_address,
            action_type=request.tipo_acao,
        )
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def refresh_token(ctx: ActionContext) -> RefreshTokenResponse:
    request = RefreshRequest.model_validate(ctx.body)
    result = await RefreshTokenUseCase(ctx.uow).execute(request.refresh_token, ctx.ip_address)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def logout(ctx: ActionContext) -> MessageResponse:
    request = LogoutRequest.model_validate(ctx.body)
    result = await LogoutUseCase(ctx.uow).execute(ctx.caller, request.device_id, ctx.ip_address)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def validate_password(ctx: ActionContext) -> ValidatePasswordResponse:
    request = ValidatePasswordRequest.model_validate(ctx.body)
    result = await ValidatePasswordUseCase(ctx.uow).execute(
        ctx.caller, request.senha, ctx.ip_address
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


def _password_command(ctx: ActionContext) -> ChangePasswordCommand:
    request = ChangePasswordRequest.model_validate(ctx.body)
    return ChangePasswordCommand(
        current_password=request.senha_atual,
        new_password=request.nova_senha,
        ip_address=ctx.ip_address,
    )


async def change_password(ctx: ActionContext) -> MessageResponse:
    result = await ChangePasswordUseCase(ctx.uow).execute(ctx.caller, _password_command(ctx))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


async def change_coercion_password(ctx: ActionContext) -> MessageResponse:
    result = await ChangeCoercionPasswordUseCase(ctx.uow).execute(
        ctx.caller, _password_command(ctx)
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value
