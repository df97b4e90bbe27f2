"""
Purpose: Ranking model (the "who is best" layer) for manual dispatch.
What it does:

Takes one order, its resolved pickup and the current agent list, and
produces a short, ordered list of recommended agents.

Computes for each eligible agent:

distance_to_pickup = agent -> restaurant (km, great-circle)

distance_to_drop = restaurant -> customer (km, great-circle)

estimated_minutes = base lead time + minutes_per_km * total distance

priority = fastest | nearby | available (standard tier)

Ordering (each rule only breaks ties left by the previous one):

1. agents with status AVAILABLE first
2. clearly higher rating first (both rated, gap > policy.rating_gap)
3. shorter total distance first

Rule: pure computation. No backend calls, no state. The caller resolves the
pickup and owns fetching/cancellation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from functools import cmp_to_key
from typing import List, Optional, Sequence

from agents.models import AgentStatus, DeliveryAgent
from agents.selection import filter_eligible_agents
from orders.models import Order, Pickup
from routing.geo import distance_between, round_half_up

from .policy import AssignmentPolicy, default_assignment_policy

logger = logging.getLogger(__name__)


class Priority(str, Enum):
    """
    Coarse recommendation bucket shown to the dispatcher.

    STANDARD keeps the wire value "available" the dashboard has always shown;
    it is the fallback tier and says nothing about the agent's status.
    """
    FASTEST = "fastest"
    NEARBY = "nearby"
    STANDARD = "available"


class NoSuggestionReason(str, Enum):
    NO_DELIVERY_LOCATION = "no_delivery_location"
    PICKUP_UNRESOLVED = "pickup_unresolved"
    NO_ELIGIBLE_AGENTS = "no_eligible_agents"


@dataclass(frozen=True)
class AgentSuggestion:
    """
    One recommended agent for an order. Derived, never persisted.
    Distances are in km, rounded for display.
    """
    agent: DeliveryAgent
    distance_to_pickup_km: float
    distance_to_drop_km: float
    total_distance_km: float
    estimated_minutes: int
    priority: Priority
    restaurant_name: str


@dataclass(frozen=True)
class Recommendation:
    """
    Scorer output. An empty list always comes with the reason it is empty.
    """
    suggestions: List[AgentSuggestion] = field(default_factory=list)
    reason: Optional[NoSuggestionReason] = None

    @property
    def is_empty(self) -> bool:
        return not self.suggestions


@dataclass(frozen=True)
class _Scored:
    # unrounded working values; rounding happens once ranking is settled
    agent: DeliveryAgent
    to_pickup: float
    to_drop: float
    total: float
    minutes: int
    priority: Priority


def estimate_delivery_minutes(total_distance_km: float, status: AgentStatus, policy: AssignmentPolicy) -> int:
    base = policy.available_base_minutes if status == AgentStatus.AVAILABLE else policy.busy_base_minutes
    return int(round_half_up(base + total_distance_km * policy.minutes_per_km))


def classify_priority(total_distance_km: float, status: AgentStatus, policy: AssignmentPolicy) -> Priority:
    if total_distance_km <= policy.fastest_max_km and status == AgentStatus.AVAILABLE:
        return Priority.FASTEST
    if total_distance_km <= policy.nearby_max_km:
        return Priority.NEARBY
    return Priority.STANDARD


def _compare(policy: AssignmentPolicy):
    def compare(a: _Scored, b: _Scored) -> int:
        a_available = a.agent.status == AgentStatus.AVAILABLE
        b_available = b.agent.status == AgentStatus.AVAILABLE
        if a_available and not b_available:
            return -1
        if b_available and not a_available:
            return 1

        if a.agent.rating is not None and b.agent.rating is not None:
            rating_diff = b.agent.rating - a.agent.rating
            if abs(rating_diff) > policy.rating_gap:
                return 1 if rating_diff > 0 else -1

        if a.total < b.total:
            return -1
        if a.total > b.total:
            return 1
        return 0

    return compare


def recommend_agents(
    order: Order,
    pickup: Optional[Pickup],
    agents: Sequence[DeliveryAgent],
    policy: Optional[AssignmentPolicy] = None,
) -> Recommendation:
    """
    Rank agents for an order and keep the best `policy.max_suggestions`.

    Args:
        order: the order being dispatched; needs a delivery coordinate.
        pickup: the restaurant resolved for the order, or None if that failed.
        agents: every known agent; ineligible ones are dropped silently.
        policy: thresholds, defaults to default_assignment_policy().

    Returns:
        Recommendation, suggestions highest-recommended first. When empty,
        `reason` says why ("cannot recommend" has one user-facing remedy,
        the reason is only there for callers that care).
    """
    policy = policy or default_assignment_policy()

    if order.delivery_location is None:
        return Recommendation(reason=NoSuggestionReason.NO_DELIVERY_LOCATION)

    if pickup is None or pickup.location is None:
        return Recommendation(reason=NoSuggestionReason.PICKUP_UNRESOLVED)

    eligible = filter_eligible_agents(agents, policy.eligible_statuses)
    if not eligible:
        return Recommendation(reason=NoSuggestionReason.NO_ELIGIBLE_AGENTS)

    # same for every agent
    to_drop = distance_between(pickup.location, order.delivery_location)

    scored: List[_Scored] = []
    for agent in eligible:
        to_pickup = distance_between(agent.location, pickup.location)
        total = to_pickup + to_drop
        if not math.isfinite(total):
            # NaN coordinates somewhere; nothing sensible to rank
            logger.debug("order %s: skipping agent %s, distance is %s", order.id, agent.id, total)
            continue
        scored.append(
            _Scored(
                agent=agent,
                to_pickup=to_pickup,
                to_drop=to_drop,
                total=total,
                minutes=estimate_delivery_minutes(total, agent.status, policy),
                priority=classify_priority(total, agent.status, policy),
            )
        )

    if not scored:
        return Recommendation(reason=NoSuggestionReason.NO_ELIGIBLE_AGENTS)

    # list.sort is stable, equal candidates keep input order
    scored.sort(key=cmp_to_key(_compare(policy)))

    digits = policy.distance_precision
    suggestions = [
        AgentSuggestion(
            agent=candidate.agent,
            distance_to_pickup_km=round_half_up(candidate.to_pickup, digits),
            distance_to_drop_km=round_half_up(candidate.to_drop, digits),
            total_distance_km=round_half_up(candidate.total, digits),
            estimated_minutes=candidate.minutes,
            priority=candidate.priority,
            restaurant_name=pickup.name,
        )
        for candidate in scored[: policy.max_suggestions]
    ]

    logger.debug(
        "order %s: %d eligible agents, suggesting %s",
        order.id, len(eligible), [s.agent.id for s in suggestions],
    )
    return Recommendation(suggestions=suggestions)


def rank_agents(
    order: Order,
    pickup: Optional[Pickup],
    agents: Sequence[DeliveryAgent],
    policy: Optional[AssignmentPolicy] = None,
) -> List[AgentSuggestion]:
    """
    Same as recommend_agents, without the reason. Empty list = cannot recommend.
    """
    return recommend_agents(order, pickup, agents, policy).suggestions
