"""
Domain Layer - Static Data Models

This module defines the static structure of virtual labs: the catalog
entry shown to participants, the engine configuration each lab supplies
(ordered steps, passing threshold), and the chemistry entities used by
the reaction-balancing exercises.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, List, Dict

"""
NavigationPolicy controls which step jumps a lab allows:
- free: any configured step, in any direction
- no_skip: go back freely, but move forward at most one step at a time
- forward_only: the current step or any later one
"""
NavigationPolicy = Literal["free", "no_skip", "forward_only"]

IconName = Literal["microscope", "beaker", "scale", "atom"]


@dataclass(frozen=True)
class StepConfig:
    """
    One step of a lab, in the order the lab declares it.

    Attributes:
        id: Unique identifier within the lab (e.g., "balance").
        label: Short label shown in the progress bar (e.g., "Balance").
        description: One-line summary of what happens in the step.
    """
    id: str
    label: str
    description: str


@dataclass(frozen=True)
class ExerciseConfig:
    """
    Engine configuration a lab passes to the SessionController.

    Attributes:
        steps: Ordered steps. The first one is where every session starts.
        passing_score: Minimum score (0-100) counted as a pass.
        show_timer: When False the elapsed-time counter is never started.
        navigation: Which step jumps are allowed (see NavigationPolicy).
    """
    steps: List[StepConfig]
    passing_score: int = 70
    show_timer: bool = True
    navigation: NavigationPolicy = "free"

    def __post_init__(self):
        if not self.steps:
            raise ValueError("An exercise needs at least one step.")
        if not 0 <= self.passing_score <= 100:
            raise ValueError(
                f"passing_score must be within [0, 100], got {self.passing_score}"
            )


@dataclass
class VirtualLab:
    """
    Catalog entry for a lab (the ExerciseMetadata a scene resolves before
    mounting a session).

    Attributes:
        id: Catalog identifier (e.g., "lab-stoichiometry").
        title: Human-readable title.
        topic_id: Curriculum topic the lab belongs to.
        description: Short blurb for the lab list.
        difficulty: 1 (easiest) to 5.
        estimated_time: Expected duration in minutes.
        icon_name: Icon shown on the lab card.
        config: Engine configuration. None for labs listed but not yet playable.
    """
    id: str
    title: str
    topic_id: str
    description: str
    difficulty: int
    estimated_time: int
    icon_name: IconName
    config: Optional[ExerciseConfig] = None


@dataclass(frozen=True)
class Molecule:
    """
    A weighted entity for the conservation check.

    Attributes:
        display_id: Label shown to the participant (e.g., "H₂O").
        unit_counts: Category -> count per single entity (e.g., {"H": 2, "O": 1}).
    """
    display_id: str
    unit_counts: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class Term:
    """A molecule together with the coefficient placed in front of it."""
    molecule: Molecule
    coefficient: int


# One side of an equation, in the order the terms are written.
EquationSide = List[Term]


BadgeCategory = Literal["streak", "mastery", "lab", "quiz", "assignment"]


@dataclass(frozen=True)
class Badge:
    """
    An achievement a participant can earn.

    Only lab badges are evaluated here; the condition is the number of
    distinct labs the participant has completed.
    """
    id: str
    name: str
    description: str
    category: BadgeCategory
    xp_value: int
    labs_required: int


@dataclass(frozen=True)
class EquationChallenge:
    """
    A reaction to balance in the Reaction Balancer lab.

    The coefficients in reactants/products are the balanced answer;
    participants supply their own coefficients for the same molecules.

    Attributes:
        id: Unique identifier (e.g., "h2_o2").
        name: Human-readable name (e.g., "Synthesis of Water").
        description: Word equation.
        reactants: Left side, with the balanced coefficients.
        products: Right side, with the balanced coefficients.
        points: Points awarded for balancing it.
        difficulty: 1 (easiest) to 3.
        hint: Shown on request; using it forfeits the first-try bonus.
    """
    id: str
    name: str
    description: str
    reactants: List[Term]
    products: List[Term]
    points: int
    difficulty: int
    hint: str
