"""
Purpose: State holder for the order assignment screen (the "glue").
What it does:
Owns the dispatcher's current view (filters, selected order, last
recommendation), resolves the selected order's pickup through an injected
lookup, runs the scorer, and forwards the human's pick to an injected sink.

Collaborators are passed in, never imported as globals:
- pickup_lookup(order_id) -> Optional[Pickup]
- assignment_sink(order_id, agent_id) -> None
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Sequence

from agents.models import AgentStatus, DeliveryAgent
from agents.selection import AgentFilter, filter_map_agents, is_free
from backend.client import BackendError
from orders.filters import OrderFilter, filter_map_orders
from orders.models import AssignmentStatus, Order, Pickup

from .policy import AssignmentPolicy, default_assignment_policy
from .scoring import NoSuggestionReason, Recommendation, recommend_agents

logger = logging.getLogger(__name__)

PickupLookup = Callable[[str], Optional[Pickup]]
AssignmentSink = Callable[[str, str], None]


class AssignmentError(Exception):
    """Raised when an assignment is attempted from an invalid board state."""
    pass


@dataclass(frozen=True)
class LegendCounts:
    pending_orders: int
    assigned_orders: int
    available_agents: int
    busy_agents: int


class AssignmentBoard:
    """
    One instance per open assignment screen. Not thread-safe; the screen
    drives it from a single event loop.
    """
    def __init__(
        self,
        orders: Sequence[Order],
        agents: Sequence[DeliveryAgent],
        pickup_lookup: PickupLookup,
        assignment_sink: AssignmentSink,
        policy: Optional[AssignmentPolicy] = None,
    ):
        self.pickup_lookup = pickup_lookup
        self.assignment_sink = assignment_sink
        self.policy = policy or default_assignment_policy()

        self.order_filter = OrderFilter.ALL
        self.agent_filter = AgentFilter.ALL

        self._orders: Dict[str, Order] = {order.id: order for order in orders}
        self._agents: List[DeliveryAgent] = list(agents)

        self.selected_order_id: Optional[str] = None
        self.recommendation: Recommendation = Recommendation()

    # --- Views ---

    @property
    def orders(self) -> List[Order]:
        return list(self._orders.values())

    @property
    def agents(self) -> List[DeliveryAgent]:
        return list(self._agents)

    @property
    def selected_order(self) -> Optional[Order]:
        if self.selected_order_id is None:
            return None
        return self._orders.get(self.selected_order_id)

    def visible_orders(self) -> List[Order]:
        return filter_map_orders(self._orders.values(), self.order_filter)

    def visible_agents(self) -> List[DeliveryAgent]:
        return filter_map_agents(self._agents, self.agent_filter)

    def legend(self) -> LegendCounts:
        orders = self.visible_orders()
        agents = self.visible_agents()
        return LegendCounts(
            pending_orders=sum(1 for order in orders if order.is_pending),
            assigned_orders=sum(1 for order in orders if order.is_assigned),
            available_agents=sum(1 for agent in agents if is_free(agent)),
            busy_agents=sum(1 for agent in agents if agent.status == AgentStatus.BUSY),
        )

    # --- Lifecycle callbacks ---

    def select_order(self, order_id: str) -> Recommendation:
        """
        Selection changed: recompute suggestions for the newly selected order.
        """
        if order_id not in self._orders:
            raise AssignmentError(f"Unknown order {order_id}")

        self.selected_order_id = order_id
        self.recommendation = self._recommend(self._orders[order_id])
        return self.recommendation

    def refresh_agents(self, agents: Sequence[DeliveryAgent]) -> Recommendation:
        """
        Agent list changed (poll or push). Recomputes for the current
        selection; the latest call always wins.
        """
        self._agents = list(agents)
        order = self.selected_order
        if order is not None:
            self.recommendation = self._recommend(order)
        return self.recommendation

    def clear_selection(self) -> None:
        self.selected_order_id = None
        self.recommendation = Recommendation()

    def assign(self, agent_id: str) -> Order:
        """
        Dispatcher picked an agent for the selected order. Writes through the
        sink first; local state only changes if that succeeded.
        """
        order = self.selected_order
        if order is None:
            raise AssignmentError("No order selected")

        agent = next((a for a in self._agents if a.id == agent_id), None)
        if agent is None:
            raise AssignmentError(f"Unknown agent {agent_id}")

        self.assignment_sink(order.id, agent.id)

        updated = replace(
            order,
            delivery_agent_id=agent.id,
            delivery_agent_name=agent.name,
            delivery_agent_status=AssignmentStatus.ASSIGNED,
        )
        self._orders[order.id] = updated
        self.clear_selection()
        return updated

    # --- Internals ---

    def _recommend(self, order: Order) -> Recommendation:
        if order.delivery_location is None:
            return Recommendation(reason=NoSuggestionReason.NO_DELIVERY_LOCATION)

        try:
            pickup = self.pickup_lookup(order.id)
        except BackendError as exc:
            logger.error("Error fetching restaurant location for order %s: %s", order.id, exc)
            pickup = None
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Malformed restaurant data for order %s: %s", order.id, exc)
            pickup = None

        recommendation = recommend_agents(order, pickup, self._agents, self.policy)
        if recommendation.is_empty:
            logger.info("No agents to recommend for order %s (%s)", order.id, recommendation.reason.value)
        return recommendation
