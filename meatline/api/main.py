import logging
from contextlib import asynccontextmanager

from aiogram.types import Update
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from meatline.config import config
from meatline.exceptions import MeatlineException
from meatline.api.routers import routers

logging.basicConfig(level=config.LOG_LEVEL)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/webhook/telegram"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """В режиме webhook бот живет в процессе API"""
    if config.WEBHOOK_URL:
        from meatline.bot import create_bot, create_dispatcher

        app.state.bot = create_bot()
        app.state.dp = create_dispatcher()
        await app.state.bot.set_webhook(config.WEBHOOK_URL + WEBHOOK_PATH)
        logger.info("Webhook set to %s%s", config.WEBHOOK_URL, WEBHOOK_PATH)
    yield
    if getattr(app.state, "bot", None):
        await app.state.bot.delete_webhook()
        await app.state.bot.session.close()


app = FastAPI(title="Meatline API", lifespan=lifespan)

for router in routers:
    app.include_router(router)


@app.exception_handler(MeatlineException)
async def meatline_exception_handler(request: Request, exc: MeatlineException):
    if exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": {"code": exc.code, "message": exc.message}},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": {"code": "request_validation_error", "message": "Invalid request body"},
            "details": [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in exc.errors()
            ],
        },
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=409,
        content={"success": False, "error": {"code": "conflict", "message": "Record already exists"}},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if config.is_development() else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": {"code": "internal_error", "message": message}},
    )


@app.post(WEBHOOK_PATH)
async def telegram_webhook(update: dict, request: Request):
    dp = getattr(request.app.state, "dp", None)
    if dp is None:
        return JSONResponse(status_code=404, content={"success": False, "error": {"code": "not_found", "message": "Webhook mode is off"}})
    await dp.feed_update(request.app.state.bot, Update.model_validate(update, context={"bot": request.app.state.bot}))
    return {"status": "ok"}


@app.get("/health")
async def health():
    return {"status": "ok"}
