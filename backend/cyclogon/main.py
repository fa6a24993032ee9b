"""
Main application module for the cyclogon backend.

This file sets up the FastAPI application, configures CORS so a browser
front end can call the API from another origin, and exposes a health
check endpoint.  The curve and shape routers are included under the
``/api`` namespace.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes_curves import router as curves_router
from .api.routes_shapes import router as shapes_router


def create_app() -> FastAPI:
    """Factory to create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application instance.
    """
    app = FastAPI(title="Cyclogon generator")

    # Allow all origins by default.  Restrict this to known front-end
    # origins when deploying publicly.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(curves_router, prefix="/api", tags=["curves"])
    app.include_router(shapes_router, prefix="/api", tags=["shapes"])

    return app


app = create_app()
