"""
认证相关Pydantic模型
"""
from pydantic import BaseModel, Field
from typing import Literal, Optional


class LoginRequest(BaseModel):
    """登录请求"""
    password: Optional[str] = Field(None, description="访问密码")


class LoginResponse(BaseModel):
    success: bool = True


class PasswordChange(BaseModel):
    """修改密码请求"""
    currentPassword: Optional[str] = Field(None, description="当前密码")
    newPassword: Optional[str] = Field(None, description="新密码")


class PasswordStatusResponse(BaseModel):
    """密码状态"""
    success: bool = True
    hasPassword: bool = Field(..., description="是否启用了密码")
    hasEnvPassword: bool = Field(..., description="环境变量中是否配置了密码")
    hasDbPassword: bool = Field(..., description="数据库中是否设置了密码")
    passwordSource: Literal['env', 'database', 'none'] = Field(..., description="生效密码的来源")
