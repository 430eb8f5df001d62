import math

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_fastapi_instrumentator import Instrumentator

from reviews_service.app.config import settings
from reviews_service.app.exceptions import ReviewServiceError
from reviews_service.app.logger import logger
from reviews_service.app.routes import router
from reviews_service.app.schemas import CREATE_MESSAGES, UPDATE_MESSAGES


def _json_safe(value):
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


def format_validation_errors(request: Request, exc: RequestValidationError) -> list:
    messages = UPDATE_MESSAGES if request.method == "PUT" else CREATE_MESSAGES
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        location = loc[0] if loc else "body"
        field = loc[-1] if len(loc) > 1 else None
        item = {
            "type": "field",
            "msg": messages.get(field, error.get("msg")) if location == "body" else error.get("msg"),
            "path": field,
            "location": location,
        }
        if error.get("type") != "missing":
            item["value"] = _json_safe(error.get("input"))
        errors.append(item)
    return jsonable_encoder(errors)


def create_app() -> FastAPI:
    app = FastAPI(title="Reviews Service")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def startup():
        logger.info("Reviews Service startup", extra={"upstream": settings.brewery_api_url})

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("Reviews Service shutdown")

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(request, exc)
        logger.warning("Ошибка валидации запроса", extra={"path": request.url.path, "errors": errors})
        return JSONResponse(status_code=400, content={"errors": errors})

    @app.exception_handler(ReviewServiceError)
    async def review_service_exception_handler(request: Request, exc: ReviewServiceError):
        return JSONResponse(status_code=exc.status_code, content=exc.content)

    @app.api_route(
        "/healthcheck",
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        response_class=PlainTextResponse,
    )
    async def healthcheck():
        return "The Review Service is ALIVE!"

    Instrumentator().instrument(app).expose(app)
    app.include_router(router)

    return app

app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
