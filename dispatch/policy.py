"""
Purpose: Central configuration for agent recommendations.
What it does:

Stores all tunable thresholds/caps for ranking agents against an order:

FASTEST_MAX_KM = 2.0
NEARBY_MAX_KM = 5.0
MINUTES_PER_KM = 2.0
RATING_GAP = 0.5
MAX_SUGGESTIONS = 3

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

from agents.models import AgentStatus, DISPATCHABLE_STATUSES


@dataclass(frozen=True)
class AssignmentPolicy:
    """
    Central configuration for the agent scorer.
    """

    # --- Eligibility ---
    # Online agents with a position are only considered in these statuses.
    eligible_statuses: FrozenSet[AgentStatus] = DISPATCHABLE_STATUSES

    # --- Priority tiers (total trip km, agent -> restaurant -> customer) ---
    # "fastest" additionally requires the agent to be AVAILABLE.
    fastest_max_km: float = 2.0
    nearby_max_km: float = 5.0

    # --- ETA model ---
    # Lead time before the agent can start moving; busy agents need longer.
    available_base_minutes: float = 5.0
    busy_base_minutes: float = 10.0
    # Flat linear cost, no routing engine involved.
    minutes_per_km: float = 2.0

    # --- Ranking ---
    # Ratings only override distance when they differ by more than this.
    rating_gap: float = 0.5
    max_suggestions: int = 3

    # Decimal places surfaced for the three distances.
    distance_precision: int = 2

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if not self.eligible_statuses:
            raise ValueError("eligible_statuses must not be empty")

        if self.fastest_max_km < 0 or self.nearby_max_km < 0:
            raise ValueError("tier thresholds must be >= 0")

        if self.fastest_max_km > self.nearby_max_km:
            raise ValueError("fastest_max_km must be <= nearby_max_km")

        if self.available_base_minutes < 0 or self.busy_base_minutes < 0:
            raise ValueError("base minutes must be >= 0")

        if self.minutes_per_km < 0:
            raise ValueError("minutes_per_km must be >= 0")

        if self.rating_gap < 0:
            raise ValueError("rating_gap must be >= 0")

        if self.max_suggestions < 1:
            raise ValueError("max_suggestions must be >= 1")

        if self.distance_precision < 0:
            raise ValueError("distance_precision must be >= 0")


def default_assignment_policy() -> AssignmentPolicy:
    """
    Convenience factory for the default policy.
    """
    p = AssignmentPolicy()
    p.validate()
    return p
