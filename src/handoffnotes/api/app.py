"""FastAPI application for the handoffnotes local JSON API."""

import secrets
from typing import Any, Literal

from fastapi import Depends, FastAPI, HTTPException, Query, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .. import __version__
from ..render.html import render_html

OutputFormat = Literal["tree", "html", "blocks"]


class RenderRequest(BaseModel):
    notes: str | None = None
    format: OutputFormat = "tree"


def _render_payload(runtime: Any, notes: str | None, fmt: str) -> dict[str, Any]:
    document = runtime.document(notes)
    if fmt == "blocks":
        return document.to_dict()
    tree = runtime.renderer.render(document)
    if fmt == "html":
        return {"html": render_html(tree)}
    return {"tree": tree.to_dict()}


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with store and renderer
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Handoff Notes API",
        description="Render shift-handoff notes to structured documents",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or not secrets.compare_digest(credentials.credentials, token):
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.post("/render")
    async def render(req: RenderRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Render notes text supplied in the request body."""
        return _render_payload(runtime, req.notes, req.format)

    @app.get("/records")
    async def list_records(auth: None = Depends(verify_token)) -> list[str]:
        """List stored record ids."""
        return list(runtime.store.list_ids())

    @app.get("/records/{record_id}")
    async def get_record(record_id: str, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Get record front matter and raw notes."""
        record = runtime.store.get(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=f"Record {record_id} not found")
        return {"id": record.id, "meta": record.meta, "notes": record.notes}

    @app.get("/records/{record_id}/render")
    async def render_record(
        record_id: str,
        format: OutputFormat = Query("tree", description="tree | html | blocks"),
        auth: None = Depends(verify_token),
    ) -> dict[str, Any]:
        """Render a stored record."""
        record = runtime.store.get(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=f"Record {record_id} not found")
        payload = _render_payload(runtime, record.notes, format)
        payload["id"] = record.id
        return payload

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
