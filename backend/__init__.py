#Marks backend as a package.
#Re-exports the client and the collaborators built on it so callers don't
#need to know internal file names.

from .client import BackendClient, BackendError
from .repository import (
    fetch_delivery_agents,
    fetch_orders,
    RestaurantPickupLookup,
    OrderAssignmentWriter,
)

__all__ = [
    "BackendClient",
    "BackendError",
    "fetch_delivery_agents",
    "fetch_orders",
    "RestaurantPickupLookup",
    "OrderAssignmentWriter",
]
