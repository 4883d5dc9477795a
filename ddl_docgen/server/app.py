"""FastAPI application with documentation routes and OpenAPI docs.

WHY: Tools that already hold parsed trees (build pipelines, dump
explorers) need documentation without writing files to disk. FastAPI
provides request validation and automatic OpenAPI documentation.

HOW: POST /documentation accepts a list of tree dumps, runs them through
a fresh DocumentationRun, and returns every generated file inline. GET
/formats and GET /health are informational.

RULES:
- Every request is an independent run: protocol names are disambiguated
  within the request only
- Unknown format → 400; malformed tree or structural violation → 422
  (the whole request fails, nothing partial is returned)
- Error responses use a consistent ErrorResponse schema
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException

from ddl_docgen import __version__
from ddl_docgen.core.errors import StructuralViolation, TreeFormatError
from ddl_docgen.core.ir import ProtocolDefinition, ProtocolDocument
from ddl_docgen.core.run import DocumentationRun
from ddl_docgen.core.tree import tree_from_dict
from ddl_docgen.formatters import FORMATTERS
from ddl_docgen.server.models import (
    DocumentationRequest,
    DocumentationResponse,
    DocumentResponse,
    ErrorResponse,
    FileContent,
    FormatInfo,
    HealthResponse,
    NonProtocolTreeResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="DDL Protocol Documentation API",
    description=(
        "REST API for turning DDL declaration tree dumps into NEX protocol "
        "documentation (Markdown wiki pages, resolved JSON models)."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


def _validate_formats(formats: List[str]) -> None:
    for key in formats:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise HTTPException(
                status_code=400,
                detail="Unknown output format '{}'. Available: {}".format(key, available),
            )


# ---------------------------------------------------------------------------
# Endpoints: Documentation
# ---------------------------------------------------------------------------


@app.post(
    "/documentation",
    response_model=DocumentationResponse,
    tags=["documentation"],
    summary="Generate documentation for DDL trees",
    description=(
        "Normalize each tree, disambiguate protocol names across the request, "
        "and return one set of files per protocol. Trees without protocols "
        "are returned as raw dumps."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unknown output format"},
        422: {"model": ErrorResponse, "description": "Malformed or structurally invalid tree"},
    },
)
async def create_documentation(request: DocumentationRequest) -> DocumentationResponse:
    format_keys = request.formats or list(FORMATTERS.keys())
    _validate_formats(format_keys)

    documentation_run = DocumentationRun()
    documents: List[DocumentResponse] = []
    non_protocol: List[NonProtocolTreeResponse] = []

    for index, data in enumerate(request.trees):
        try:
            result = documentation_run.process_tree(tree_from_dict(data))
        except (TreeFormatError, StructuralViolation) as exc:
            logger.warning("Rejecting tree %d: %s", index, exc)
            raise HTTPException(status_code=422, detail="Tree {}: {}".format(index, exc))

        if result.non_protocol is not None:
            non_protocol.append(NonProtocolTreeResponse(
                key=result.non_protocol.key,
                tree_index=index,
                content=result.non_protocol.content,
            ))
            continue

        for document in result.documents:
            files = []
            for key in format_keys:
                for output in FORMATTERS[key]().format(document):
                    files.append(FileContent(
                        filename="{}{}".format(document.protocol.name, output.suffix),
                        media_type=output.media_type,
                        content=output.content,
                    ))
            documents.append(DocumentResponse(
                name=document.protocol.name,
                tree_index=index,
                files=files,
            ))

    return DocumentationResponse(documents=documents, non_protocol_trees=non_protocol)


# ---------------------------------------------------------------------------
# Endpoints: Formats
# ---------------------------------------------------------------------------


@app.get(
    "/formats",
    response_model=List[FormatInfo],
    tags=["formats"],
    summary="List available output formats",
)
async def list_formats() -> List[FormatInfo]:
    # An empty protocol is enough to learn each formatter's suffix
    dummy = ProtocolDocument(protocol=ProtocolDefinition(name="dummy"))
    result = []
    for key, formatter_cls in sorted(FORMATTERS.items()):
        formatter = formatter_cls()
        outputs = formatter.format(dummy)
        result.append(FormatInfo(
            key=key,
            name=formatter.name,
            suffix=outputs[0].suffix if outputs else "",
        ))
    return result


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the ddl-docgen-api console script."""
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
