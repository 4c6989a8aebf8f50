"""
Domain Layer - Static Data Models

Defines the static structure of virtual labs: catalog entries, engine
configuration, steps, and the chemistry entities used by the
conservation check.
"""

from virtual_labs.domain.models import (
    Badge,
    EquationChallenge,
    EquationSide,
    ExerciseConfig,
    Molecule,
    NavigationPolicy,
    StepConfig,
    Term,
    VirtualLab,
)

__all__ = [
    "Badge",
    "EquationChallenge",
    "EquationSide",
    "ExerciseConfig",
    "Molecule",
    "NavigationPolicy",
    "StepConfig",
    "Term",
    "VirtualLab",
]
