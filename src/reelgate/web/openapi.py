from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

# Endpoints reachable without a session token
PUBLIC_ENDPOINTS = {
    ("POST", "/api/verify-password"),
    ("GET", "/api/session"),
    ("GET", "/api/video-stream"),
    ("GET", "/health"),
}


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="ReelGate API",
            version="0.1.0",
            summary="Password-gated streaming of a single video",
            routes=app.routes,
        )

        # Add security schemes
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "BearerAuth": {
                "type": "http",
                "scheme": "bearer",
                "description": "Session token from /api/verify-password",
            },
        }

        # Apply security globally (will be overridden for public endpoints)
        openapi_schema["security"] = [{"BearerAuth": []}]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    # Mark as public endpoint (no security required)
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")
    details: str | None = Field(None, description="Extra diagnostics, only for an unavailable video")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"success": False, "message": "Incorrect password", "type": "authentication_error"},
                {"success": False, "message": "Invalid token", "type": "access_denied"},
                {
                    "success": False,
                    "message": "Video not available",
                    "type": "not_found",
                    "details": "Video file not found: movie.mp4",
                },
            ]
        }
    }
