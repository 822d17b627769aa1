"""
Progress Letter - Letters API Router

Presentation-layer endpoints over the form state store. State is kept per
session in memory; nothing is persisted.
"""
from __future__ import annotations
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, ConfigDict, Field

from ..models import LetterField, LetterState
from ..services.export import build_export
from ..services.form_store import SessionNotFoundError, SessionRegistry, get_registry
from ..services.renderer import render_document

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/letters", tags=["letters"])


# =============================================================================
# PYDANTIC MODELS FOR API
# =============================================================================

class StudentModel(BaseModel):
    id: str = ""
    name: str = ""
    strengths: str = ""
    improvements: str = ""
    praise: str = ""
    paid_until: str = ""
    next_payment_period: str = ""
    next_payment_amount: str = ""
    session_details: str = ""
    note: str = ""
    commitment: str = ""
    strategy: str = ""


class LetterStateModel(BaseModel):
    recipient: str = ""
    subject: str = ""
    students: List[StudentModel] = Field(default_factory=list)
    summary: str = ""
    conditional: str = ""
    wishing: str = ""
    signature: str = ""


class SessionResponse(BaseModel):
    session_id: str
    state: LetterStateModel


class FieldUpdateRequest(BaseModel):
    value: str


class StudentPatchRequest(BaseModel):
    """Partial student update - only the fields sent are changed."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    strengths: Optional[str] = None
    improvements: Optional[str] = None
    praise: Optional[str] = None
    paid_until: Optional[str] = None
    next_payment_period: Optional[str] = None
    next_payment_amount: Optional[str] = None
    session_details: Optional[str] = None
    note: Optional[str] = None
    commitment: Optional[str] = None
    strategy: Optional[str] = None


class StudentCreatedResponse(BaseModel):
    session_id: str
    student: StudentModel
    state: LetterStateModel


class LetterPreviewResponse(BaseModel):
    content: str
    student_count: int
    word_count: int
    content_hash: str


class RenderResponse(LetterPreviewResponse):
    """Preview plus the state as rendered, with student ids filled in."""
    state: LetterStateModel


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def session_response(session_id: str, state: LetterState) -> SessionResponse:
    return SessionResponse(session_id=session_id, state=LetterStateModel(**state.to_dict()))


def load_snapshot(registry: SessionRegistry, session_id: str) -> LetterState:
    """Current snapshot of a session, or 404."""
    try:
        return registry.get(session_id).store.snapshot
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post("/sessions", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    blank: bool = Query(False, description="Start with empty fields instead of the seeded defaults"),
    registry: SessionRegistry = Depends(get_registry),
):
    """Open an editing session. It starts with exactly one empty student."""
    session = registry.create(blank=blank)
    return session_response(session.session_id, session.store.snapshot)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    return session_response(session_id, load_snapshot(registry, session_id))


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_session(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    try:
        registry.discard(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/sessions/{session_id}/fields/{field}", response_model=SessionResponse)
async def update_field(
    session_id: str,
    field: LetterField,
    request: FieldUpdateRequest,
    registry: SessionRegistry = Depends(get_registry),
):
    """Set recipient, subject, summary, conditional, wishing or signature."""
    try:
        with registry.edit(session_id) as store:
            state = store.update_field(field, request.value)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    return session_response(session_id, state)


@router.post(
    "/sessions/{session_id}/students",
    response_model=StudentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_student(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    try:
        with registry.edit(session_id) as store:
            student = store.add_student()
            state = store.snapshot
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    return StudentCreatedResponse(
        session_id=session_id,
        student=StudentModel(**student.to_dict()),
        state=LetterStateModel(**state.to_dict()),
    )


@router.patch("/sessions/{session_id}/students/{student_id}", response_model=SessionResponse)
async def update_student(
    session_id: str,
    student_id: str,
    request: StudentPatchRequest,
    registry: SessionRegistry = Depends(get_registry),
):
    """Merge the sent fields into one student. Unknown student ids change nothing."""
    updates = request.model_dump(exclude_unset=True, exclude_none=True)
    try:
        with registry.edit(session_id) as store:
            state = store.update_student(student_id, updates)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    return session_response(session_id, state)


@router.delete("/sessions/{session_id}/students/{student_id}", response_model=SessionResponse)
async def remove_student(
    session_id: str,
    student_id: str,
    registry: SessionRegistry = Depends(get_registry),
):
    """
    Remove a student entry.

    The first entry is never removable here, so the form always keeps at
    least one student. The store itself has no such rule.
    """
    try:
        with registry.edit(session_id) as store:
            ids = store.snapshot.student_ids()
            if ids and ids[0] == student_id:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail="The first student entry cannot be removed",
                )
            state = store.remove_student(student_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    return session_response(session_id, state)


@router.get("/sessions/{session_id}/preview", response_model=LetterPreviewResponse)
async def preview_letter(session_id: str, registry: SessionRegistry = Depends(get_registry)):
    """Rendered letter for the preview surface (and clipboard copy)."""
    letter = render_document(load_snapshot(registry, session_id))
    return LetterPreviewResponse(**letter.to_dict())


@router.get("/sessions/{session_id}/download")
async def download_letter(
    session_id: str,
    context: Optional[str] = Query(None, description="Filename context; defaults to the recipient"),
    registry: SessionRegistry = Depends(get_registry),
):
    """Rendered letter as a UTF-8 .txt attachment."""
    export = build_export(load_snapshot(registry, session_id), context=context, on_date=date.today())
    logger.info(f"Download {export.filename} for session {session_id}")
    return Response(
        content=export.encoded(),
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.post("/render", response_model=RenderResponse)
async def render_state(request: LetterStateModel):
    """
    Render a posted state without opening a session.

    Students sent without an id, or with a repeated one, get a fresh id.
    """
    state = LetterState.from_dict(request.model_dump())
    letter = render_document(state)
    return RenderResponse(state=LetterStateModel(**state.to_dict()), **letter.to_dict())
