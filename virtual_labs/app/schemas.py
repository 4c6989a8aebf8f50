"""
API Layer - Request/Response Schemas

Pydantic models for API request and response validation.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel


class StepRead(BaseModel):
    id: str
    label: str
    description: str


class LabRead(BaseModel):
    id: str
    title: str
    topic_id: str
    description: str
    difficulty: int
    estimated_time: int
    icon_name: str
    available: bool
    steps: List[StepRead] = []
    passing_score: Optional[int] = None
    show_timer: bool = False
    navigation: Optional[str] = None


class StartSessionRequest(BaseModel):
    participant_id: str
    lab_id: str


class NoteRead(BaseModel):
    id: str
    timestamp: datetime
    text: str
    context_tag: Optional[str] = None


class SessionRead(BaseModel):
    session_id: str
    participant_id: str
    lab_id: str
    status: str
    current_step: StepRead
    step_index: int
    total_steps: int
    elapsed_ticks: int
    started_at: datetime
    completed_at: Optional[datetime] = None
    score: Optional[int] = None
    notebook: List[NoteRead] = []


class SetStepRequest(BaseModel):
    step_id: str


class NoteRequest(BaseModel):
    text: str
    context_tag: Optional[str] = None


class CompleteRequest(BaseModel):
    score: int


class CompletionRead(BaseModel):
    score: int
    passing_score: int
    passed: bool
    elapsed_ticks: int
    elapsed: str
    notes_count: int


class AttemptRead(BaseModel):
    lab_id: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    score: Optional[int] = None
    notes_count: int


class TermIn(BaseModel):
    display_id: str
    unit_counts: Dict[str, int]
    coefficient: int


class BalanceCheckRequest(BaseModel):
    reactants: List[TermIn]
    products: List[TermIn]


class CategoryTotals(BaseModel):
    reactants: int
    products: int


class BalanceCheckResponse(BaseModel):
    balanced: bool
    totals: Dict[str, CategoryTotals]
