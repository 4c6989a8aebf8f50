"""
Step Sequencer

Holds a lab's ordered steps and answers "where is this step" and
"may the session jump from here to there".
"""

from typing import Dict, List, Sequence

from ..domain.models import NavigationPolicy, StepConfig
from .exceptions import StepTransitionNotAllowedError, UnknownStepError


class StepSequencer:
    def __init__(self, steps: Sequence[StepConfig], navigation: NavigationPolicy = "free"):
        if not steps:
            raise ValueError("A lab needs at least one step.")

        self._steps: List[StepConfig] = list(steps)
        self.navigation = navigation

        # Index for O(1) lookup
        self._index: Dict[str, int] = {}
        for position, step in enumerate(self._steps):
            if step.id in self._index:
                raise ValueError(f"Duplicate step id '{step.id}'.")
            self._index[step.id] = position

    def __len__(self) -> int:
        return len(self._steps)

    @property
    def steps(self) -> List[StepConfig]:
        return list(self._steps)

    @property
    def first_step_id(self) -> str:
        return self._steps[0].id

    def index_of(self, step_id: str) -> int:
        if step_id not in self._index:
            raise UnknownStepError(f"Step '{step_id}' is not configured for this lab.")
        return self._index[step_id]

    def step_at(self, index: int) -> StepConfig:
        return self._steps[index]

    def check_transition(self, from_step_id: str, to_step_id: str) -> int:
        """
        Validates a jump under the navigation policy.

        Returns:
            The index of the target step.

        Raises:
            UnknownStepError: if either id is not configured.
            StepTransitionNotAllowedError: if the policy forbids the jump.
        """
        current = self.index_of(from_step_id)
        target = self.index_of(to_step_id)

        if self.navigation == "forward_only" and target < current:
            raise StepTransitionNotAllowedError(
                f"Cannot go back from '{from_step_id}' to '{to_step_id}'."
            )
        if self.navigation == "no_skip" and target > current + 1:
            raise StepTransitionNotAllowedError(
                f"Cannot skip ahead from '{from_step_id}' to '{to_step_id}'."
            )
        return target
