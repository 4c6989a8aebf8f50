import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Depends, status
from fastapi.responses import Response

from .dependencies import get_lab_session_service
from ..config import settings
from ..domain.models import Molecule, Term, VirtualLab
from ..execution.controller import SessionController
from ..execution.exceptions import (
    EmptyObservationError,
    InvalidCoefficientError,
    InvalidScoreError,
    LabEngineError,
    UnknownStepError,
)
from ..services.exceptions import LabNotFoundError, SessionNotFoundError
from ..services.lab_sessions import LabSessionService
from ..validation.conservation import compare_sides
from .schemas import (
    AttemptRead,
    BalanceCheckRequest,
    BalanceCheckResponse,
    CategoryTotals,
    CompleteRequest,
    CompletionRead,
    LabRead,
    NoteRead,
    NoteRequest,
    SessionRead,
    SetStepRequest,
    StartSessionRequest,
    StepRead,
)

logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Resolved the same way request handlers resolve it, overrides included
    provider = app.dependency_overrides.get(get_lab_session_service, get_lab_session_service)
    service = provider()
    yield
    service.shutdown()


app = FastAPI(title="Virtual Labs", lifespan=lifespan)

# Contract violations caused by bad input; the rest mean "not in this state"
_UNPROCESSABLE = (UnknownStepError, EmptyObservationError, InvalidScoreError, InvalidCoefficientError)


def _engine_error(e: LabEngineError) -> HTTPException:
    if isinstance(e, _UNPROCESSABLE):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=409, detail=str(e))


# --- Mappers ---

def _lab_dto(lab: VirtualLab) -> LabRead:
    config = lab.config
    return LabRead(
        id=lab.id,
        title=lab.title,
        topic_id=lab.topic_id,
        description=lab.description,
        difficulty=lab.difficulty,
        estimated_time=lab.estimated_time,
        icon_name=lab.icon_name,
        available=config is not None,
        steps=[StepRead(id=s.id, label=s.label, description=s.description) for s in config.steps] if config else [],
        passing_score=config.passing_score if config else None,
        show_timer=config.show_timer if config else False,
        navigation=config.navigation if config else None,
    )


def _session_dto(session_id: str, controller: SessionController) -> SessionRead:
    snapshot = controller.snapshot()
    step = controller.current_step
    attempt = snapshot.attempt

    # "dto" stands for Data Transfer Object.
    notebook_dto = [
        NoteRead(id=e.id, timestamp=e.timestamp, text=e.text, context_tag=e.context_tag)
        for e in attempt.notebook_entries
    ]

    return SessionRead(
        session_id=session_id,
        participant_id=snapshot.participant_id,
        lab_id=snapshot.exercise_id,
        status=controller.status.value,
        current_step=StepRead(id=step.id, label=step.label, description=step.description),
        step_index=snapshot.step_index,
        total_steps=snapshot.total_steps,
        elapsed_ticks=snapshot.elapsed_ticks,
        started_at=attempt.started_at,
        completed_at=attempt.completed_at,
        score=attempt.score,
        notebook=notebook_dto,
    )


# --- Endpoints ---

@app.get("/labs", response_model=list[LabRead])
def list_labs(service: LabSessionService = Depends(get_lab_session_service)):
    return [_lab_dto(lab) for lab in service.list_labs()]


@app.get("/labs/{lab_id}", response_model=LabRead)
def get_lab(lab_id: str, service: LabSessionService = Depends(get_lab_session_service)):
    try:
        return _lab_dto(service.get_lab(lab_id))
    except LabNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/participants/{participant_id}/attempts", response_model=list[AttemptRead])
def list_attempts(participant_id: str, service: LabSessionService = Depends(get_lab_session_service)):
    return [
        AttemptRead(
            lab_id=a.exercise_id,
            started_at=a.started_at,
            completed_at=a.completed_at,
            score=a.score,
            notes_count=len(a.notebook_entries),
        )
        for a in service.list_attempts(participant_id)
    ]


# Session endpoints run on the event loop that hosts the timer and background jobs.

@app.post("/sessions", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
async def start_session(
    request: StartSessionRequest,
    service: LabSessionService = Depends(get_lab_session_service)
):
    """Mounts a lab session for a participant."""
    try:
        session_id = service.start_session(request.participant_id, request.lab_id)
    except LabNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return _session_dto(session_id, service.get_controller(session_id))


@app.get("/sessions/{session_id}", response_model=SessionRead)
async def get_session(session_id: str, service: LabSessionService = Depends(get_lab_session_service)):
    try:
        return _session_dto(session_id, service.get_controller(session_id))
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")


@app.put("/sessions/{session_id}/step", response_model=SessionRead)
async def set_step(
    session_id: str,
    request: SetStepRequest,
    service: LabSessionService = Depends(get_lab_session_service)
):
    try:
        service.set_step(session_id, request.step_id)
        return _session_dto(session_id, service.get_controller(session_id))
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except LabEngineError as e:
        raise _engine_error(e)


@app.post("/sessions/{session_id}/notes", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def add_note(
    session_id: str,
    request: NoteRequest,
    service: LabSessionService = Depends(get_lab_session_service)
):
    try:
        entry = service.add_note(session_id, request.text, request.context_tag)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except LabEngineError as e:
        raise _engine_error(e)
    return NoteRead(id=entry.id, timestamp=entry.timestamp, text=entry.text, context_tag=entry.context_tag)


@app.post("/sessions/{session_id}/complete", response_model=CompletionRead)
async def complete_session(
    session_id: str,
    request: CompleteRequest,
    service: LabSessionService = Depends(get_lab_session_service)
):
    try:
        summary = service.complete(session_id, request.score)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except LabEngineError as e:
        raise _engine_error(e)

    return CompletionRead(
        score=summary.score,
        passing_score=summary.passing_score,
        passed=summary.passed,
        elapsed_ticks=summary.elapsed_ticks,
        elapsed=summary.format_elapsed(),
        notes_count=summary.notes_count,
    )


@app.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def exit_session(session_id: str, service: LabSessionService = Depends(get_lab_session_service)):
    """
    Exits a session. Returns 204 No Content on success.
    """
    if not service.end_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")

    # For 204, we must explicitly return a Response object with no content
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post("/equations/check", response_model=BalanceCheckResponse)
def check_equation(request: BalanceCheckRequest):
    reactants = [Term(Molecule(t.display_id, t.unit_counts), t.coefficient) for t in request.reactants]
    products = [Term(Molecule(t.display_id, t.unit_counts), t.coefficient) for t in request.products]

    try:
        totals = compare_sides(reactants, products)
    except InvalidCoefficientError as e:
        raise _engine_error(e)

    return BalanceCheckResponse(
        balanced=all(left == right for left, right in totals.values()),
        totals={c: CategoryTotals(reactants=left, products=right) for c, (left, right) in totals.items()},
    )
