"""HTTP API for documentation generation.

WHY: Build pipelines and other tools want documentation for freshly
parsed trees without shelling out to the CLI.

HOW: app.py defines a FastAPI app; models.py holds the Pydantic request
and response schemas.

RULES:
- Each request is its own documentation run (fresh naming state)
- Start with ``python -m ddl_docgen --serve`` or ``ddl-docgen-api``
"""
