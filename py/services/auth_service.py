"""
身份验证服务
访问密码门禁：环境变量密码，或数据库中设置并启用的密码
"""
from typing import Optional, Dict, Any, Tuple
from fastapi import HTTPException, status
import logging

from context import AppContext
from services.log_service import log_service

logger = logging.getLogger(__name__)

PASSWORD_KEY = 'password'
PASSWORD_FLAG_KEY = 'password_set'
BEARER_PREFIX = 'Bearer '


class AuthService:
    """身份验证服务类"""

    def _stored_password(self, ctx: AppContext) -> Tuple[Optional[str], bool]:
        """读取数据库中的密码及启用标志，读取失败视为未设置"""
        try:
            stored = ctx.storage.get_setting(PASSWORD_KEY)
            enabled = ctx.storage.get_setting(PASSWORD_FLAG_KEY) == 'true'
        except Exception as e:
            logger.error(f"读取数据库密码失败: {str(e)}")
            return None, False
        return (stored or None), enabled

    def password_source(self, ctx: AppContext) -> str:
        """生效密码来源: database / env / none"""
        stored, enabled = self._stored_password(ctx)
        if enabled and stored:
            return 'database'
        if ctx.settings.PASSWORD:
            return 'env'
        return 'none'

    def resolve_effective_password(self, ctx: AppContext) -> Optional[str]:
        """
        获取当前生效的密码

        数据库中启用了密码时使用数据库密码，否则使用环境变量 PASSWORD；
        都没有时返回 None（不启用认证）。
        """
        stored, enabled = self._stored_password(ctx)
        if enabled and stored:
            return stored
        return ctx.settings.PASSWORD or None

    def verify_authorization(self, ctx: AppContext, authorization: Optional[str]) -> bool:
        """校验 Authorization 头"""
        effective = self.resolve_effective_password(ctx)
        if not effective:
            return True
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return False
        return authorization[len(BEARER_PREFIX):] == effective

    def login(self, ctx: AppContext, password: Optional[str], client: Dict[str, Any]) -> Dict[str, Any]:
        """密码登录"""
        if not password:
            log_service.append(ctx, 'warn', 'login.missing_password')
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Password is required"
            )

        effective = self.resolve_effective_password(ctx)
        if effective is None or password == effective:
            log_service.append(ctx, 'info', 'login.success', client)
            return {"success": True}

        log_service.append(ctx, 'warn', 'login.failed', {**client, 'reason': 'invalid password'})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password"
        )

    def password_status(self, ctx: AppContext) -> Dict[str, Any]:
        """密码配置状态"""
        stored, enabled = self._stored_password(ctx)
        has_db_password = bool(enabled and stored)
        has_env_password = bool(ctx.settings.PASSWORD)
        source = self.password_source(ctx)
        return {
            "success": True,
            "hasPassword": source != 'none',
            "hasEnvPassword": has_env_password,
            "hasDbPassword": has_db_password,
            "passwordSource": source
        }

    def change_password(self, ctx: AppContext, current_password: Optional[str], new_password: Optional[str]) -> Dict[str, Any]:
        """修改数据库中保存的密码并启用"""
        if not current_password or not new_password:
            log_service.append(ctx, 'warn', 'password.change.missing_fields')
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing password fields"
            )

        effective = self.resolve_effective_password(ctx)
        if effective is not None and current_password != effective:
            log_service.append(ctx, 'warn', 'password.change.invalid_current')
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid current password"
            )

        ctx.storage.set_setting(PASSWORD_KEY, new_password)
        ctx.storage.set_setting(PASSWORD_FLAG_KEY, 'true')
        log_service.append(ctx, 'info', 'password.change.success')
        return {"success": True}


# 创建全局的认证服务实例
auth_service = AuthService()
