"""
Conservation Check

Decides whether two weighted sides balance: for every category (element),
the sum of coefficient x count must be the same on both sides. A category
missing from one side counts as zero there.

Example:
    2 H₂ + 1 O₂ -> 2 H₂O    H: 4 = 4, O: 2 = 2    balanced
    1 H₂ + 1 O₂ -> 1 H₂O    O: 2 != 1             not balanced
"""

from collections import Counter
from typing import Dict, Sequence, Tuple

from ..domain.models import EquationSide, Molecule, Term
from ..execution.exceptions import InvalidCoefficientError


def _check_coefficient(term: Term) -> int:
    coefficient = term.coefficient
    if isinstance(coefficient, bool) or not isinstance(coefficient, int) or coefficient < 1:
        raise InvalidCoefficientError(
            f"Coefficient for '{term.molecule.display_id}' must be a positive integer, "
            f"got {coefficient!r}."
        )
    return coefficient


def count_units(side: EquationSide) -> Dict[str, int]:
    """
    Per-category totals for one side (the atom counter).

    Raises:
        InvalidCoefficientError: if any coefficient is not a positive integer.
    """
    totals: Counter = Counter()
    for term in side:
        coefficient = _check_coefficient(term)
        for category, count in term.molecule.unit_counts.items():
            totals[category] += coefficient * count
    return dict(totals)


def compare_sides(
    reactants: EquationSide, products: EquationSide
) -> Dict[str, Tuple[int, int]]:
    """
    (reactant total, product total) for every category on either side,
    in the order categories first appear.
    """
    left = count_units(reactants)
    right = count_units(products)
    categories = list(left) + [c for c in right if c not in left]
    return {c: (left.get(c, 0), right.get(c, 0)) for c in categories}


def unbalanced_categories(
    reactants: EquationSide, products: EquationSide
) -> Dict[str, Tuple[int, int]]:
    """The categories whose totals differ, for feedback to the participant."""
    return {
        category: totals
        for category, totals in compare_sides(reactants, products).items()
        if totals[0] != totals[1]
    }


def is_balanced(reactants: EquationSide, products: EquationSide) -> bool:
    return not unbalanced_categories(reactants, products)


def with_coefficients(
    molecules: Sequence[Molecule], coefficients: Sequence[int]
) -> EquationSide:
    """Pairs molecules with participant-supplied coefficients, position by position."""
    if len(molecules) != len(coefficients):
        raise ValueError(
            f"Expected {len(molecules)} coefficients, got {len(coefficients)}."
        )
    return [Term(molecule, coefficient) for molecule, coefficient in zip(molecules, coefficients)]
