"""
认证路由
处理登录、密码状态和修改密码
"""
from fastapi import APIRouter, Depends

from context import AppContext
from dependencies import get_context, get_client_info, require_auth
from schemas.auth import LoginRequest, LoginResponse, PasswordChange, PasswordStatusResponse
from schemas.common import SuccessResponse, ErrorResponse
from services.auth_service import auth_service

# 创建路由实例
router = APIRouter()


@router.post("/login", response_model=LoginResponse, responses={401: {"model": ErrorResponse}})
async def login(
    login_data: LoginRequest,
    client: dict = Depends(get_client_info),
    ctx: AppContext = Depends(get_context)
):
    """
    密码登录
    - **password**: 访问密码
    """
    return auth_service.login(ctx, login_data.password, client)


@router.get("/password/status", response_model=PasswordStatusResponse, dependencies=[Depends(require_auth)])
async def password_status(ctx: AppContext = Depends(get_context)):
    """获取密码配置状态"""
    return auth_service.password_status(ctx)


@router.post("/password", response_model=SuccessResponse, dependencies=[Depends(require_auth)])
async def change_password(
    password_data: PasswordChange,
    ctx: AppContext = Depends(get_context)
):
    """
    修改访问密码
    - **currentPassword**: 当前密码
    - **newPassword**: 新密码（保存在数据库中并立即生效）
    """
    return auth_service.change_password(ctx, password_data.currentPassword, password_data.newPassword)
