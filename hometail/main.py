import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi

from hometail.core.error_handler import error_response
from hometail.core.identity import AuthenticationError
from hometail.core.logging_config import setup_logging
from hometail.domains.animals.router.animal_router import router as animal_router
from hometail.domains.animals.router.taxonomy_router import router as taxonomy_router
from hometail.domains.adoption.router.adoption_request_router import router as adoption_request_router

logger = logging.getLogger(__name__)

API_TITLE = "HomeTail API"
API_VERSION = "1.0.0"


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        description="Backend API for the HomeTail animal adoption service",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=[
            {"name": "Animals", "description": "Animal listings and search"},
            {"name": "Taxonomy", "description": "Categories and breeds"},
            {"name": "Adoption", "description": "Adoption request lifecycle"},
        ]
    )

    # Routers
    app.include_router(animal_router)
    app.include_router(taxonomy_router)
    app.include_router(adoption_request_router)

    # Error handlers
    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        return error_response(401, exc.code, exc.reason, request.url.path)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        reason = f"{field}: {first.get('msg')}" if field else "Invalid request."
        return error_response(400, "REQUEST_400_1", reason, request.url.path)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "SERVER_500_1", "Internal server error.", request.url.path)

    @app.get("/")
    def root():
        return {"message": "HomeTail API is running"}

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=API_TITLE,
            version=API_VERSION,
            description="""
            ## HomeTail API

            Lists adoptable animals and mediates adoption requests between
            requesters and animal owners.

            ### Authentication
            Send a Firebase ID token as `Authorization: Bearer <token>`.
            Browsing and searching animals works without a token.
            """,
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "bearerFormat": "JWT",
                "description": "Firebase ID token. Example: Bearer <token>"
            }
        }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi
    return app


app = create_app()

# local entry point
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "hometail.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
