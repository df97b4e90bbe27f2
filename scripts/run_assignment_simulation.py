import logging
import os
from dataclasses import replace
from typing import Dict, List, Optional

import pandas as pd

from agents.models import AgentStatus, DeliveryAgent
from dispatch.board import AssignmentBoard
from orders.models import Order, Pickup


class CsvPickupLookup:
    """In-memory stand-in for the backend's order -> restaurant lookup."""
    def __init__(self, pickups_by_order: Dict[str, Pickup]):
        self.pickups_by_order = pickups_by_order

    def __call__(self, order_id: str) -> Optional[Pickup]:
        return self.pickups_by_order.get(order_id)


class RecordingAssignmentSink:
    def __init__(self):
        self.assignments = []

    def __call__(self, order_id: str, agent_id: str) -> None:
        self.assignments.append((order_id, agent_id))


def _records(path: str) -> List[dict]:
    df = pd.read_csv(path)
    # empty CSV cells come back as NaN, the record builders expect None
    df = df.astype(object).where(pd.notna(df), None)
    return df.to_dict("records")


def load_data(data_dir="sampledata"):
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    data_path = os.path.join(base_dir, data_dir)

    restaurants = {
        row["restaurant_id"]: row for row in _records(os.path.join(data_path, "restaurants.csv"))
    }

    orders = []
    pickups = {}
    for row in _records(os.path.join(data_path, "orders.csv")):
        order = Order.from_record(row)
        orders.append(order)

        restaurant = restaurants.get(row["restaurant_id"])
        if restaurant is None:
            continue
        pickup = Pickup.from_record({"restaurant_id": row["restaurant_id"], "restaurants": restaurant})
        if pickup is not None:
            pickups[order.id] = pickup

    agents = [DeliveryAgent.from_record(row) for row in _records(os.path.join(data_path, "agents.csv"))]
    return orders, agents, pickups


def run_simulation():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print("=== STARTING ASSIGNMENT SIMULATION ===")

    # 1. Load Data
    orders, agents, pickups = load_data()
    print(f"Loaded {len(orders)} Orders and {len(agents)} Agents.\n")

    # 2. Configure the board with in-memory collaborators
    sink = RecordingAssignmentSink()
    board = AssignmentBoard(orders, agents, pickup_lookup=CsvPickupLookup(pickups), assignment_sink=sink)

    legend = board.legend()
    print(
        f"Legend: {legend.pending_orders} pending / {legend.assigned_orders} assigned orders, "
        f"{legend.available_agents} available / {legend.busy_agents} busy agents\n"
    )

    # 3. Walk every pending order, always take the top suggestion
    unassigned = 0
    for order in [o for o in board.orders if o.is_pending]:
        recommendation = board.select_order(order.id)

        if recommendation.is_empty:
            unassigned += 1
            print(f"[SKIPPED] {order.order_number} -> no recommendation ({recommendation.reason.value})")
            board.clear_selection()
            continue

        for rank, suggestion in enumerate(recommendation.suggestions, 1):
            print(
                f"  {order.order_number} #{rank}: {suggestion.agent.name} "
                f"[{suggestion.priority.value}] total {suggestion.total_distance_km:.1f}km "
                f"(pickup {suggestion.distance_to_pickup_km:.1f}km, drop {suggestion.distance_to_drop_km:.1f}km) "
                f"~{suggestion.estimated_minutes}min"
            )

        best = recommendation.suggestions[0]
        board.assign(best.agent.id)
        # the agent is on a trip now, which pushes them down for the next orders
        board.refresh_agents([
            replace(agent, status=AgentStatus.BUSY) if agent.id == best.agent.id else agent
            for agent in board.agents
        ])
        print(f"[SUCCESS] {order.order_number} -> Assigned to {best.agent.name} from {best.restaurant_name}")

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Orders Assigned: {len(sink.assignments)}")
    print(f"Orders Without Recommendation: {unassigned}")


if __name__ == "__main__":
    run_simulation()
