"""
RFC 7807 Problem Details error response schemas.

Implements standard error response format for the API.
"""

from typing import Any

from pydantic import BaseModel, Field


class ProblemDiagnostic(BaseModel):
    """One report line attached to a circular dependency problem."""

    severity: str = Field(..., description="info, warning or error")
    message: str = Field(..., description="Human-readable text")


class ProblemDetails(BaseModel):
    """
    RFC 7807 Problem Details for HTTP APIs.

    Standard error response format that provides machine-readable details
    about errors in a consistent structure.
    """

    type: str = Field(
        ...,
        description="URI reference that identifies the problem type",
        examples=["https://chunk-cycles.dev/errors/circular-chunk-dependency"],
    )
    title: str = Field(..., description="Short, human-readable summary of the problem")
    status: int = Field(..., description="HTTP status code", ge=100, le=599)
    detail: str = Field(
        ..., description="Human-readable explanation specific to this occurrence"
    )
    instance: str = Field(
        ..., description="URI reference that identifies the specific occurrence"
    )
    correlation_id: str | None = Field(
        None, description="Correlation ID for request tracing"
    )
    cycles: list[list[str]] | None = Field(
        None, description="Detected cycle paths (for circular dependency errors)"
    )
    diagnostics: list[ProblemDiagnostic] | None = Field(
        None,
        description="Full cycle report, module detail included when enabled",
    )
    field: str | None = Field(
        None, description="Field name that caused the error (for validation errors)"
    )
    value: Any | None = Field(
        None, description="Invalid value that caused the error (for validation errors)"
    )

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "examples": [
                {
                    "type": "https://chunk-cycles.dev/errors/circular-chunk-dependency",
                    "title": "Circular Chunk Dependency",
                    "status": 409,
                    "detail": "Detected 1 circular dependencies between chunks",
                    "instance": "/api/v1/bundles/cycles",
                    "cycles": [["index.js", "vendor.js", "index.js"]],
                    "diagnostics": [
                        {
                            "severity": "error",
                            "message": "Detected 1 circular dependencies between chunks",
                        },
                        {
                            "severity": "warning",
                            "message": "Cycle 1: index.js → vendor.js → index.js",
                        },
                    ],
                },
                {
                    "type": "about:blank",
                    "title": "Unprocessable Entity",
                    "status": 422,
                    "detail": "Validation failed: field 'chunks' is required",
                    "instance": "/api/v1/bundles/cycles",
                },
            ]
        }
