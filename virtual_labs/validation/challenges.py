"""
Reaction Balancer scoring.

Checks a participant's coefficients against an EquationChallenge and
works out the points earned for a correct answer.
"""

from typing import Sequence

from ..domain.models import EquationChallenge
from .conservation import is_balanced, with_coefficients

FIRST_TRY_BONUS = 0.5


def check_challenge(
    challenge: EquationChallenge,
    reactant_coefficients: Sequence[int],
    product_coefficients: Sequence[int],
) -> bool:
    """
    True when the participant's coefficients conserve every element.
    Any balanced answer counts, not only the one stored on the challenge
    (4H₂ + 2O₂ -> 4H₂O is accepted too).
    """
    reactants = with_coefficients([t.molecule for t in challenge.reactants], reactant_coefficients)
    products = with_coefficients([t.molecule for t in challenge.products], product_coefficients)
    return is_balanced(reactants, products)


def award_points(challenge: EquationChallenge, previous_attempts: int, hint_shown: bool) -> int:
    """
    Points for a balanced answer: the challenge's points, plus half again
    when it was balanced on the first check without the hint.
    """
    bonus = 0
    if not hint_shown and previous_attempts == 0:
        bonus = int(challenge.points * FIRST_TRY_BONUS)
    return challenge.points + bonus
