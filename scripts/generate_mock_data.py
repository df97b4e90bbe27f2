import pandas as pd
import numpy as np
import uuid
from datetime import datetime, timezone, timedelta

# Center around Pattambi, where the dashboard map opens by default
CENTER_LAT = 10.8045
CENTER_LON = 76.1958


def generate_mock_data(num_orders=40, num_restaurants=8, num_agents=25, output_prefix="sampledata/"):
    """
    Generates restaurants, delivery agents and orders for exercising the agent scorer.
    A few agents are offline or have no GPS fix, and a few orders have no
    delivery coordinates, so the empty-result paths show up in a run too.
    """
    rng = np.random.default_rng()
    now = datetime.now(timezone.utc)

    # 1. Restaurants (pickups) within ~3km of the center
    restaurants = []
    for restaurant_index in range(num_restaurants):
        restaurants.append({
            "restaurant_id": f"r_{str(uuid.uuid4())[:8]}",
            "name": f"Restaurant {restaurant_index+1}",
            "latitude": np.round(CENTER_LAT + rng.uniform(-0.03, 0.03), 6),
            "longitude": np.round(CENTER_LON + rng.uniform(-0.03, 0.03), 6),
        })

    # 2. Agents scattered within ~6km
    agents = []
    for agent_index in range(num_agents):
        has_fix = rng.random() > 0.05
        agents.append({
            "id": f"AGT-{str(agent_index+1).zfill(3)}",
            "name": f"Agent {agent_index+1}",
            "lat": np.round(CENTER_LAT + rng.uniform(-0.06, 0.06), 6) if has_fix else None,
            "lng": np.round(CENTER_LON + rng.uniform(-0.06, 0.06), 6) if has_fix else None,
            "is_online": bool(rng.random() < 0.85),
            "status": rng.choice(["available", "online", "busy", "offline"], p=[0.5, 0.1, 0.3, 0.1]),
            "vehicle_type": rng.choice(["bike", "car"], p=[0.8, 0.2]),
            "phone_number": f"+9198{rng.integers(10000000, 99999999)}",
            # roughly a third of agents have never been rated
            "rating": np.round(rng.uniform(3.5, 5.0), 1) if rng.random() < 0.7 else None,
        })

    # 3. Orders, delivered within ~5km of their restaurant
    orders = []
    for order_index in range(num_orders):
        restaurant = restaurants[rng.integers(0, num_restaurants)]
        has_coords = rng.random() > 0.1
        orders.append({
            "id": str(uuid.uuid4()),
            "orderno": f"ORD-{str(order_index+1).zfill(5)}",
            "restaurant_id": restaurant["restaurant_id"],
            "user_latitude": np.round(restaurant["latitude"] + rng.uniform(-0.05, 0.05), 6) if has_coords else None,
            "user_longitude": np.round(restaurant["longitude"] + rng.uniform(-0.05, 0.05), 6) if has_coords else None,
            "delivery_agent_status": "pending",
            "delivery_agent_id": None,
            "user_address": f"House {rng.integers(1, 300)}, Ward {rng.integers(1, 30)}",
            "total_amount": np.round(rng.uniform(120.0, 900.0), 2),
            "created_at": (now - timedelta(minutes=int(rng.integers(0, 90)))).isoformat(),
        })

    # 4. Save to CSV
    pd.DataFrame(restaurants).to_csv(f"{output_prefix}restaurants.csv", index=False)
    pd.DataFrame(agents).to_csv(f"{output_prefix}agents.csv", index=False)
    df = pd.DataFrame(orders)
    df.to_csv(f"{output_prefix}orders.csv", index=False)
    print(f"✅ Generated {num_restaurants} restaurants, {num_agents} agents and {num_orders} orders under '{output_prefix}'")

    # quick preview of pickup density
    print("\nTop 5 Restaurants (orders per pickup):")
    counts = df["restaurant_id"].value_counts().head(5)
    names = {r["restaurant_id"]: r["name"] for r in restaurants}
    for restaurant_id, count in counts.items():
        print(f"  {names[restaurant_id]}: {count} orders")


if __name__ == "__main__":
    import os
    os.makedirs("sampledata", exist_ok=True)
    generate_mock_data()
