"""
Markdown 笔记服务
FastAPI 应用工厂：注册路由、异常处理、CORS 以及存储生命周期
"""
from pathlib import Path
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings
from context import AppContext
from routers import api_router
from services.log_service import log_service
from storage import StorageBackend
from utils.webdav import WebDAVClient

logger = logging.getLogger(__name__)


def _error_body(message: str, detail: Optional[str] = None) -> dict:
    body = {"success": False, "error": message}
    if detail:
        body["detail"] = detail
    return body


def _register_exception_handlers(app: FastAPI):
    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            detail = f"{location}: {first.get('msg')}" if location else first.get("msg")
        else:
            detail = None
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Missing or invalid fields", detail)
        )

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        ctx = getattr(request.app.state, "ctx", None)
        if ctx is not None:
            log_service.append(ctx, 'error', 'request.failed', {
                'method': request.method, 'path': request.url.path, 'error': str(exc)
            })
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal server error")
        )


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[StorageBackend] = None,
    webdav: Optional[WebDAVClient] = None
) -> FastAPI:
    """
    创建 FastAPI 应用

    storage / webdav 未提供时根据配置创建，测试中可直接注入。
    """
    settings = settings or Settings()

    # 验证配置
    missing_configs = settings.validate()
    if missing_configs:
        logger.warning("配置验证警告:")
        for config in missing_configs:
            logger.warning(f"  - {config}")
    else:
        logger.info("配置验证通过 ✓")

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION
    )
    app.state.ctx = AppContext.from_settings(settings, storage=storage, webdav=webdav)

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    @app.on_event("startup")
    def _startup():
        ctx: AppContext = app.state.ctx
        try:
            ctx.storage.init()
        except Exception:
            # 存储不可用时仍然启动，由 /api/health 报告状态
            logger.exception("存储后端初始化失败")
            return
        log_service.append(ctx, 'info', 'server started', {
            'storage': ctx.storage.name,
            'webdav': ctx.webdav is not None
        })

    @app.on_event("shutdown")
    async def _shutdown():
        await app.state.ctx.close()

    app.include_router(api_router, prefix="/api")

    # 前端构建产物（可选），必须在 API 路由之后挂载
    static_dir = Path(settings.STATIC_DIR) if settings.STATIC_DIR else None
    if static_dir and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
        logger.info(f"静态文件目录: {static_dir}")

    return app

# 本地开发:
# uvicorn app:create_app --factory --host 0.0.0.0 --port 3000 --reload
