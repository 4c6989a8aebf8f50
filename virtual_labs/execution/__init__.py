"""
Execution Layer - Lab Session Engine

Defines the SessionController (the lab state machine) and the parts it is
built from: step sequencing, the notebook, scoring, the elapsed-time counter
and fire-and-forget dispatch.
"""

from virtual_labs.execution.controller import LabStatus, SessionController
from virtual_labs.execution.dispatch import AsyncioDispatcher, Dispatcher, InlineDispatcher
from virtual_labs.execution.notebook import NotebookLog
from virtual_labs.execution.scoring import ScoringGate, percentage_score
from virtual_labs.execution.sequencer import StepSequencer
from virtual_labs.execution.timer import AsyncioTicker, ManualTicker, Ticker


__all__ = [
    "AsyncioDispatcher",
    "AsyncioTicker",
    "Dispatcher",
    "InlineDispatcher",
    "LabStatus",
    "ManualTicker",
    "NotebookLog",
    "ScoringGate",
    "SessionController",
    "StepSequencer",
    "Ticker",
    "percentage_score",
]
