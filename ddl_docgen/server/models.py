"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: One request model for documentation generation and one response
model per endpoint. All models include Field descriptions for rich
OpenAPI docs.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Trees are accepted as plain JSON objects; their shape is validated
  by core.tree against tree_schema.json, not by Pydantic
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class DocumentationRequest(BaseModel):
    """Trees to document in one run.

    RULES:
    - trees are processed in order and share protocol naming state
    - formats defaults to all available formats
    """

    trees: List[Dict[str, Any]] = Field(
        description="DDL declaration tree dumps, in processing order.",
    )
    formats: Optional[List[str]] = Field(
        default=None,
        description="Output format keys. Defaults to all available formats.",
    )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class FileContent(BaseModel):
    """One generated file, returned inline."""

    filename: str = Field(description="Suggested filename: protocol name plus format suffix.")
    media_type: str = Field(description="MIME type of the content.")
    content: str = Field(description="The file content.")


class DocumentResponse(BaseModel):
    """All files generated for one protocol."""

    name: str = Field(description="Disambiguated protocol name.")
    tree_index: int = Field(description="Index of the source tree in the request.")
    files: List[FileContent] = Field(description="Generated files, one per requested format.")


class NonProtocolTreeResponse(BaseModel):
    """A tree that declared no protocols, returned as its raw dump."""

    key: str = Field(description="Run-wide key, e.g. 'non-protocol-tree-0'.")
    tree_index: int = Field(description="Index of the source tree in the request.")
    content: str = Field(description="Pretty-printed JSON dump of the tree.")


class DocumentationResponse(BaseModel):
    """Result of one documentation run."""

    documents: List[DocumentResponse] = Field(description="Documents in processing order.")
    non_protocol_trees: List[NonProtocolTreeResponse] = Field(
        default_factory=list,
        description="Trees without protocol declarations.",
    )


class FormatInfo(BaseModel):
    """Description of an available output format."""

    key: str = Field(description="Format identifier used in API requests.")
    name: str = Field(description="Human-readable format name.")
    suffix: str = Field(description="File suffix produced (e.g. '.md').")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
