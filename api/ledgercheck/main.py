from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .log import configure_logging
from .routers import movements


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.dependency_overrides[get_settings] = lambda: settings

    # CORS: allow web origin for dev
    allowed_origins = {str(settings.app_url), "http://localhost:3000", "http://127.0.0.1:3000"}
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Malformed bodies are a 400, not FastAPI's 422
    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "message": "Bad request",
                "errors": [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()],
            },
        )

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "service": settings.app_name,
            "env": settings.app_env,
        }

    # Routers
    app.include_router(movements.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ledgercheck.main:app", host="0.0.0.0", port=8000, reload=True)
