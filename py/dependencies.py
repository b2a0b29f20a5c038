"""
FastAPI 依赖
"""
from typing import Any, Dict, Optional
from fastapi import Depends, Header, HTTPException, Request, status

from context import AppContext
from services.auth_service import auth_service


def get_context(request: Request) -> AppContext:
    """获取应用上下文（启动时创建，保存在 app.state 中）"""
    return request.app.state.ctx


def require_auth(
    ctx: AppContext = Depends(get_context),
    authorization: Optional[str] = Header(None)
) -> None:
    """
    访问密码校验

    未配置任何密码时放行；否则要求 Authorization: Bearer <password>
    """
    if not auth_service.verify_authorization(ctx, authorization):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_client_info(request: Request) -> Dict[str, Any]:
    """请求方信息，用于登录日志"""
    forwarded = request.headers.get('x-forwarded-for', '')
    ip = (
        forwarded.split(',')[0].strip()
        or request.headers.get('x-real-ip')
        or (request.client.host if request.client else None)
    )
    return {
        'ip': ip,
        'ua': request.headers.get('user-agent'),
    }
