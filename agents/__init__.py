"""
Delivery agents domain package.

Public API:
- Domain models: DeliveryAgent, AgentStatus
- Selection rules: filter_eligible_agents, filter_map_agents, AgentFilter
"""
from .models import DeliveryAgent, AgentStatus, DISPATCHABLE_STATUSES
from .selection import AgentFilter, filter_eligible_agents, filter_map_agents, is_free

__all__ = ["DeliveryAgent",
           "AgentStatus",
           "DISPATCHABLE_STATUSES",
           "AgentFilter",
           "filter_eligible_agents",
           "filter_map_agents",
           "is_free",
           ]
