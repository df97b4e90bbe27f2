"""
Purpose: Business rules for which agents are considered at all.
What it does:
Filters out agents the scorer must never recommend, and narrows the
agent list shown on the assignment map.
"""

from enum import Enum
from typing import Iterable, List

from .models import AgentStatus, DeliveryAgent, DISPATCHABLE_STATUSES


class AgentFilter(str, Enum):
    ALL = "all"
    AVAILABLE = "available"
    BUSY = "busy"


def is_free(agent: DeliveryAgent) -> bool:
    # "online" agents count as free on the map, the scorer still treats them as non-available
    return agent.status in (AgentStatus.AVAILABLE, AgentStatus.ONLINE)


def filter_eligible_agents(
    agents: Iterable[DeliveryAgent],
    statuses: Iterable[AgentStatus] = DISPATCHABLE_STATUSES,
) -> List[DeliveryAgent]:
    """
    Returns only agents who are online, have a known position and
    a status the dispatcher may recommend.
    """
    allowed = frozenset(statuses)
    eligible = []

    for agent in agents:
        if not agent.is_online:
            continue

        if not agent.has_location:
            continue

        if agent.status not in allowed:
            continue

        eligible.append(agent)

    return eligible


def filter_map_agents(agents: Iterable[DeliveryAgent], agent_filter: AgentFilter = AgentFilter.ALL) -> List[DeliveryAgent]:
    """
    Agents that get a marker on the map: online with a position,
    then narrowed by the dispatcher's filter choice.
    """
    visible = [agent for agent in agents if agent.is_online and agent.has_location]

    if agent_filter == AgentFilter.AVAILABLE:
        return [agent for agent in visible if is_free(agent)]
    if agent_filter == AgentFilter.BUSY:
        return [agent for agent in visible if agent.status == AgentStatus.BUSY]
    return visible
