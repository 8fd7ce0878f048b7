from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from gemini_proxy.api.handlers import TranslationHandler
from gemini_proxy.api.handlers import router as translation_router
from gemini_proxy.api.middleware import APIKeyMiddleware, setup_middlewares
from gemini_proxy.api.routes import router as health_router
from gemini_proxy.common.logging import (
    configure_logging,
    get_logger_with_request_id,
    get_request_id_from_request,
)
from gemini_proxy.config.settings import Config, get_config_file_path, reload_config
from gemini_proxy.config.watcher import ConfigWatcher
from gemini_proxy.core.model_cache import UpstreamModelCache
from gemini_proxy.models.errors import get_error_response

# 启动时同步加载配置（模块级别，应用启动时执行）
config = Config.from_file_sync()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    host, port = await config.get_server_config()

    configure_logging(config.logging)

    # 模型缓存在整个进程生命周期内存在，配置重载时保留
    app.state.model_cache = UpstreamModelCache()
    app.state.translation_handler = await TranslationHandler.create(
        config, app.state.model_cache
    )

    async def on_config_reload():
        """配置重载时的回调函数"""
        new_config = await reload_config()
        configure_logging(new_config.logging)
        app.state.translation_handler = await TranslationHandler.create(
            new_config, app.state.model_cache
        )
        logger.info("配置热重载完成，服务已更新")

    config_watcher = ConfigWatcher(get_config_file_path())
    config_watcher.add_reload_callback(on_config_reload)
    await config_watcher.start_watching()
    app.state.config_watcher = config_watcher

    logger.info(
        f"启动 Claude To Gemini 服务器 - Host: {host}, Port: {port}, LogLevel: {config.logging.level}"
    )

    yield

    logger.info("正在停止配置文件监听...")
    config_watcher.stop_watching()
    app.state.model_cache.reset()
    logger.info("服务器已停止")


app = FastAPI(
    title="Claude To Gemini Server",
    version="0.1.0",
    description="Translate Claude tool-calling requests into Gemini requests.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_middlewares(app)
app.add_middleware(APIKeyMiddleware, api_key=config.api_key)

app.include_router(health_router)
app.include_router(translation_router)


@app.get("/")
async def root():
    return {"message": "Welcome to the Claude To Gemini Server"}


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """全局异常处理，防止Internal Server Error直接返回给客户端"""
    bound_logger = get_logger_with_request_id(get_request_id_from_request(request))
    bound_logger.opt(exception=exc).error(
        f"捕获未处理的服务器异常 - {request.method} {request.url}: {type(exc).__name__}"
    )

    error_response = await get_error_response(500)
    return JSONResponse(status_code=500, content=error_response.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """处理Pydantic验证错误"""
    bound_logger = get_logger_with_request_id(get_request_id_from_request(request))
    bound_logger.warning("请求验证失败")

    validation_errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", "value_error"),
        }
        for error in exc.errors()
    ]
    error_response = await get_error_response(
        422, details={"validation_errors": validation_errors}
    )
    return JSONResponse(status_code=422, content=error_response.model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """处理404等HTTP错误"""
    message = None if exc.status_code == 404 else str(exc.detail)
    error_response = await get_error_response(exc.status_code, message=message)
    return JSONResponse(status_code=exc.status_code, content=error_response.model_dump())
