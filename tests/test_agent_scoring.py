import random

import pytest

from agents.models import AgentStatus, DeliveryAgent
from dispatch.policy import AssignmentPolicy, default_assignment_policy
from dispatch.scoring import (
    NoSuggestionReason,
    Priority,
    classify_priority,
    estimate_delivery_minutes,
    rank_agents,
    recommend_agents,
)
from orders.models import Order, Pickup


@pytest.fixture
def policy():
    return default_assignment_policy()


@pytest.fixture
def pickup():
    return Pickup(name="Spice Garden", location=(10.0, 76.0))


@pytest.fixture
def order():
    return Order(id="order_1", delivery_location=(10.05, 76.05))


def _is_two_decimals(value):
    return abs(value * 100 - round(value * 100)) < 1e-6


def test_end_to_end_example(order, pickup):
    """
    Available agent ranks above a busy one sitting on the restaurant,
    whatever their ratings.
    """
    agent_a = DeliveryAgent.new("A", "Arun", 10.01, 76.01, AgentStatus.AVAILABLE, rating=4.9)
    agent_b = DeliveryAgent.new("B", "Bala", 10.0, 76.0, AgentStatus.BUSY, rating=5.0)

    suggestions = rank_agents(order, pickup, [agent_b, agent_a])

    assert [s.agent.id for s in suggestions] == ["A", "B"]

    first, second = suggestions
    # both legs share the restaurant -> customer drop
    assert first.distance_to_drop_km == second.distance_to_drop_km
    assert second.distance_to_pickup_km == 0.0
    assert first.total_distance_km > 5
    assert first.priority == Priority.STANDARD
    assert first.priority.value == "available"
    assert first.estimated_minutes == 24
    assert second.estimated_minutes == 26
    assert first.restaurant_name == "Spice Garden"

    for suggestion in suggestions:
        assert _is_two_decimals(suggestion.distance_to_pickup_km)
        assert _is_two_decimals(suggestion.distance_to_drop_km)
        assert _is_two_decimals(suggestion.total_distance_km)


def test_ranking_is_deterministic(order, pickup):
    agents = [
        DeliveryAgent.new(f"agent_{i}", f"Agent {i}", 10.0 + i * 0.003, 76.0 - i * 0.002,
                          AgentStatus.AVAILABLE if i % 3 else AgentStatus.BUSY,
                          rating=None if i % 4 == 0 else 3.5 + (i % 5) * 0.3)
        for i in range(12)
    ]

    assert rank_agents(order, pickup, agents) == rank_agents(order, pickup, agents)


def test_output_is_capped_at_three(order, pickup):
    rng = random.Random(7)
    agents = [
        DeliveryAgent.new(f"agent_{i}", f"Agent {i}",
                          10.0 + (rng.random() - 0.5) * 0.1,
                          76.0 + (rng.random() - 0.5) * 0.1,
                          rng.choice([AgentStatus.AVAILABLE, AgentStatus.ONLINE, AgentStatus.BUSY]),
                          rating=round(rng.uniform(3.0, 5.0), 1))
        for i in range(100)
    ]

    assert len(rank_agents(order, pickup, agents)) == 3


def test_max_suggestions_comes_from_policy(order, pickup):
    agents = [DeliveryAgent.new(f"agent_{i}", "x", 10.0, 76.0 + i * 0.001) for i in range(10)]
    policy = AssignmentPolicy(max_suggestions=5)

    assert len(rank_agents(order, pickup, agents, policy)) == 5


def test_offline_and_unlocated_agents_never_appear(order, pickup):
    agents = [
        # sitting on the restaurant with a perfect rating, but offline
        DeliveryAgent.new("offline", "Off", 10.0, 76.0, AgentStatus.AVAILABLE, is_online=False, rating=5.0),
        DeliveryAgent.new("no_gps", "NoFix", None, None, AgentStatus.AVAILABLE, rating=5.0),
        DeliveryAgent.new("half_gps", "Half", 10.0, None, AgentStatus.AVAILABLE, rating=5.0),
        DeliveryAgent.new("status_offline", "StatusOff", 10.0, 76.0, AgentStatus.OFFLINE),
        DeliveryAgent.new("weird_status", "Weird", 10.0, 76.0, "on_break"),
        DeliveryAgent.new("far", "Far", 10.2, 76.2, AgentStatus.BUSY, rating=3.0),
    ]

    suggestions = rank_agents(order, pickup, agents)

    assert [s.agent.id for s in suggestions] == ["far"]


def test_available_beats_busy_regardless_of_rating(order, pickup):
    busy = DeliveryAgent.new("busy", "Busy", 10.01, 76.0, AgentStatus.BUSY, rating=5.0)
    available = DeliveryAgent.new("available", "Free", 10.01, 76.0, AgentStatus.AVAILABLE, rating=3.0)

    suggestions = rank_agents(order, pickup, [busy, available])

    assert [s.agent.id for s in suggestions] == ["available", "busy"]


def test_online_status_is_not_treated_as_available(order, pickup):
    online = DeliveryAgent.new("online", "Online", 10.0, 76.0, AgentStatus.ONLINE, rating=5.0)
    available = DeliveryAgent.new("available", "Free", 10.02, 76.0, AgentStatus.AVAILABLE, rating=3.0)

    suggestions = rank_agents(order, pickup, [online, available])

    assert [s.agent.id for s in suggestions] == ["available", "online"]


def test_clearly_higher_rating_beats_shorter_distance(pickup):
    order = Order(id="order_2", delivery_location=(10.0, 76.05))
    nearer = DeliveryAgent.new("nearer", "Near", 10.005, 76.0, AgentStatus.AVAILABLE, rating=4.0)
    better = DeliveryAgent.new("better", "Better", 10.01, 76.0, AgentStatus.AVAILABLE, rating=4.8)

    suggestions = rank_agents(order, pickup, [nearer, better])

    assert [s.agent.id for s in suggestions] == ["better", "nearer"]


@pytest.mark.parametrize(
    "near_rating, far_rating",
    [
        (4.2, 4.5),   # gap 0.3
        (4.0, 4.5),   # gap exactly 0.5, not enough
        (None, 5.0),  # only one rated
        (4.8, None),
    ],
)
def test_small_or_missing_rating_gap_falls_back_to_distance(pickup, near_rating, far_rating):
    order = Order(id="order_3", delivery_location=(10.0, 76.05))
    nearer = DeliveryAgent.new("nearer", "Near", 10.005, 76.0, AgentStatus.AVAILABLE, rating=near_rating)
    farther = DeliveryAgent.new("farther", "Far", 10.01, 76.0, AgentStatus.AVAILABLE, rating=far_rating)

    suggestions = rank_agents(order, pickup, [farther, nearer])

    assert [s.agent.id for s in suggestions] == ["nearer", "farther"]


def test_ranking_uses_unrounded_totals(pickup):
    # both totals round to 4.99 km, only the unrounded values tell them apart
    order = Order(id="at_restaurant", delivery_location=(10.0, 76.0))
    farther = DeliveryAgent.new("farther", "Far", 10.0449, 76.0, AgentStatus.AVAILABLE)
    nearer = DeliveryAgent.new("nearer", "Near", 10.04486, 76.0, AgentStatus.AVAILABLE)

    suggestions = rank_agents(order, pickup, [farther, nearer])

    assert [s.agent.id for s in suggestions] == ["nearer", "farther"]
    assert suggestions[0].total_distance_km == suggestions[1].total_distance_km == 4.99


def test_order_without_delivery_location_gets_nothing(pickup):
    order = Order(id="no_coords", delivery_location=None)
    agents = [DeliveryAgent.new("a", "A", 10.0, 76.0)]

    recommendation = recommend_agents(order, pickup, agents)

    assert recommendation.suggestions == []
    assert recommendation.reason == NoSuggestionReason.NO_DELIVERY_LOCATION


def test_unresolved_pickup_gets_nothing(order):
    agents = [DeliveryAgent.new("a", "A", 10.0, 76.0)]

    recommendation = recommend_agents(order, None, agents)

    assert recommendation.is_empty
    assert recommendation.reason == NoSuggestionReason.PICKUP_UNRESOLVED


def test_no_agents_gets_nothing(order, pickup):
    recommendation = recommend_agents(order, pickup, [])

    assert rank_agents(order, pickup, []) == []
    assert recommendation.reason == NoSuggestionReason.NO_ELIGIBLE_AGENTS


def test_all_agents_offline_gets_nothing(order, pickup):
    agents = [DeliveryAgent.new(f"a{i}", "A", 10.0, 76.0, is_online=False) for i in range(5)]

    assert rank_agents(order, pickup, agents) == []


def test_successful_recommendation_has_no_reason(order, pickup):
    recommendation = recommend_agents(order, pickup, [DeliveryAgent.new("a", "A", 10.0, 76.0)])

    assert not recommendation.is_empty
    assert recommendation.reason is None


def test_nan_coordinates_are_skipped_not_raised(order, pickup):
    agents = [
        DeliveryAgent.new("nan", "NaN", float("nan"), 76.0),
        DeliveryAgent.new("ok", "Ok", 10.0, 76.0),
    ]

    assert [s.agent.id for s in rank_agents(order, pickup, agents)] == ["ok"]


def test_priority_boundaries(policy):
    assert classify_priority(2.0, AgentStatus.AVAILABLE, policy) == Priority.FASTEST
    assert classify_priority(2.01, AgentStatus.AVAILABLE, policy) == Priority.NEARBY
    assert classify_priority(1.0, AgentStatus.BUSY, policy) == Priority.NEARBY
    assert classify_priority(1.0, AgentStatus.ONLINE, policy) == Priority.NEARBY
    assert classify_priority(5.0, AgentStatus.BUSY, policy) == Priority.NEARBY
    assert classify_priority(5.01, AgentStatus.AVAILABLE, policy) == Priority.STANDARD


def test_fastest_tier_end_to_end(policy):
    order = Order(id="close", delivery_location=(10.005, 76.0))
    pickup = Pickup(name="Corner Cafe", location=(10.0, 76.0))
    agent = DeliveryAgent.new("a", "A", 10.002, 76.0, AgentStatus.AVAILABLE)

    [suggestion] = rank_agents(order, pickup, [agent], policy)

    assert suggestion.total_distance_km < 2
    assert suggestion.priority == Priority.FASTEST


def test_estimated_minutes(policy):
    # 5 + 0.75 * 2 = 6.5, halves round up
    assert estimate_delivery_minutes(0.75, AgentStatus.AVAILABLE, policy) == 7
    assert estimate_delivery_minutes(0.0, AgentStatus.BUSY, policy) == 10
    assert estimate_delivery_minutes(3.2, AgentStatus.ONLINE, policy) == 16


@pytest.mark.parametrize(
    "overrides",
    [
        {"fastest_max_km": 6.0, "nearby_max_km": 5.0},
        {"max_suggestions": 0},
        {"rating_gap": -0.1},
        {"minutes_per_km": -1.0},
        {"eligible_statuses": frozenset()},
    ],
)
def test_invalid_policy_is_rejected(overrides):
    with pytest.raises(ValueError):
        AssignmentPolicy(**overrides).validate()
