"""FastAPI application entrypoint for tokensmith service mode."""

from __future__ import annotations

import asyncio
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..config import KNOWN_PLATFORMS
from ..diff import compute_line_diff, diff_stats, unified_diff
from ..errors import TokenDocumentError
from ..models import DiffRecord, GenerationResult
from ..orchestrator import GenerationRequest, Orchestrator

# Token exports from large Figma files stay well below this.
MAX_BODY_BYTES = 10 * 1024 * 1024
_TOO_LARGE = "Request body exceeds 10 MB"


class GenerateRequest(BaseModel):
    light: Dict[str, Any]
    dark: Dict[str, Any]
    values: Optional[Dict[str, Any]] = None
    typography: Optional[Dict[str, Any]] = None
    primitives: Optional[Dict[str, Any]] = None
    platforms: List[str] = Field(default_factory=lambda: list(KNOWN_PLATFORMS))
    best_practices: bool = True
    references: Dict[str, str] = Field(default_factory=dict)
    changelog: bool = False


class ArtifactModel(BaseModel):
    filename: str
    content: str
    format: str
    platform: str
    reference_content: Optional[str] = None


class WarningModel(BaseModel):
    type: str
    message: str
    details: List[str] = Field(default_factory=list)


class ModifiedTokenModel(BaseModel):
    name: str
    old_value: str
    new_value: str


class RenamedTokenModel(BaseModel):
    old_name: str
    new_name: str
    value: str


class FamilyRenameModel(BaseModel):
    old_family: str
    new_family: str
    members: List[RenamedTokenModel]


class DiffRecordModel(BaseModel):
    filename: str
    added_lines: int
    removed_lines: int
    added_tokens: List[str]
    removed_tokens: List[str]
    modified_tokens: List[ModifiedTokenModel]
    renamed_tokens: List[RenamedTokenModel]
    family_renames: List[FamilyRenameModel]


class ImpactModel(BaseModel):
    primitive_name: str
    change_type: str
    affected_semantics: List[str]


class GenerateResponse(BaseModel):
    artifacts: List[ArtifactModel]
    stats: Dict[str, int]
    warnings: List[WarningModel]
    diffs: List[DiffRecordModel]
    impact: List[ImpactModel]
    changelog: Optional[str] = None


class DiffRequest(BaseModel):
    reference: str
    generated: str
    filename: str = "tokens"


class DiffResponse(BaseModel):
    record: DiffRecordModel
    added: int
    removed: int
    unchanged: int
    modified: int
    unified: str


class HealthResponse(BaseModel):
    status: str


class BodySizeLimitMiddleware:
    """Rejects request bodies over ``max_bytes``, whether declared up front or streamed in chunks."""

    def __init__(self, app: ASGIApp, max_bytes: int = MAX_BODY_BYTES) -> None:
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = Headers(scope=scope).get("content-length")
        if length is not None and length.isdigit() and int(length) > self.max_bytes:
            response = JSONResponse(status_code=413, content={"detail": _TOO_LARGE})
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    raise HTTPException(status_code=413, detail=_TOO_LARGE)
            return message

        await self.app(scope, limited_receive, send)


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing tokensmith operations."""

    app = FastAPI(title="Tokensmith Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request to keep state predictable.
        return orchestrator_factory()

    app.add_middleware(BodySizeLimitMiddleware, max_bytes=MAX_BODY_BYTES)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        request = GenerationRequest(
            light=payload.light,
            dark=payload.dark,
            values=payload.values,
            typography=payload.typography,
            primitives=payload.primitives,
            platforms=payload.platforms,
            best_practices=payload.best_practices,
            references=payload.references,
        )

        def _run_generate() -> tuple[GenerationResult, Optional[str]]:
            result = orchestrator.generate(request)
            changelog = orchestrator.changelog(result, request.platforms) if payload.changelog else None
            return result, changelog

        loop = asyncio.get_running_loop()
        result, changelog = await loop.run_in_executor(None, _run_generate)
        return _generate_response(result, changelog)

    @app.post("/diff", response_model=DiffResponse)
    async def diff_files(
        payload: DiffRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> DiffResponse:
        def _run_diff() -> DiffResponse:
            record = orchestrator.diff_files(payload.reference, payload.generated, payload.filename)
            summary = diff_stats(
                compute_line_diff(payload.reference, payload.generated),
                modified=len(record.modified_tokens),
            )
            return DiffResponse(
                record=_diff_record_model(record),
                added=summary.added,
                removed=summary.removed,
                unchanged=summary.unchanged,
                modified=summary.modified,
                unified=unified_diff(payload.reference, payload.generated, payload.filename),
            )

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run_diff)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(TokenDocumentError)
    async def document_error_handler(_: Any, exc: TokenDocumentError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "0.0.0.0", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)


# ----------------------------------------------------------------------
# Internals
# ----------------------------------------------------------------------
def _generate_response(result: GenerationResult, changelog: Optional[str]) -> GenerateResponse:
    return GenerateResponse(
        artifacts=[ArtifactModel(**asdict(artifact)) for artifact in result.artifacts],
        stats=asdict(result.stats),
        warnings=[
            WarningModel(type=warning.type, message=warning.message, details=list(warning.details))
            for warning in result.warnings
        ],
        diffs=[_diff_record_model(record) for record in result.diffs],
        impact=[
            ImpactModel(
                primitive_name=entry.primitive_name,
                change_type=entry.change_type,
                affected_semantics=list(entry.affected_semantics),
            )
            for entry in result.impact
        ],
        changelog=changelog,
    )


def _diff_record_model(record: DiffRecord) -> DiffRecordModel:
    return DiffRecordModel(
        filename=record.filename,
        added_lines=record.added_lines,
        removed_lines=record.removed_lines,
        added_tokens=list(record.added_tokens),
        removed_tokens=list(record.removed_tokens),
        modified_tokens=[ModifiedTokenModel(**asdict(token)) for token in record.modified_tokens],
        renamed_tokens=[RenamedTokenModel(**asdict(token)) for token in record.renamed_tokens],
        family_renames=[
            FamilyRenameModel(
                old_family=family.old_family,
                new_family=family.new_family,
                members=[RenamedTokenModel(**asdict(member)) for member in family.members],
            )
            for family in record.family_renames
        ],
    )


__all__ = ["BodySizeLimitMiddleware", "MAX_BODY_BYTES", "create_app", "run_service"]
