"""
Validation Layer - Conservation Checks

Generic balance check shared by the equation-balancing labs, plus the
Reaction Balancer's challenge scoring.
"""

from virtual_labs.validation.conservation import (
    compare_sides,
    count_units,
    is_balanced,
    unbalanced_categories,
    with_coefficients,
)
from virtual_labs.validation.challenges import award_points, check_challenge

__all__ = [
    "award_points",
    "check_challenge",
    "compare_sides",
    "count_units",
    "is_balanced",
    "unbalanced_categories",
    "with_coefficients",
]
