#Expose the high-level pipeline pieces:
#Scoring / ranking (pure)
#Policy knobs
#Assignment board (the screen-level state holder)

from .policy import AssignmentPolicy, default_assignment_policy
from .scoring import (
    AgentSuggestion,
    NoSuggestionReason,
    Priority,
    Recommendation,
    rank_agents,
    recommend_agents,
)
from .board import AssignmentBoard, AssignmentError, LegendCounts #the main object a screen talks to

__all__ = [
    "AssignmentPolicy",
    "default_assignment_policy",
    "AgentSuggestion",
    "NoSuggestionReason",
    "Priority",
    "Recommendation",
    "rank_agents",
    "recommend_agents",
    "AssignmentBoard",
    "AssignmentError",
    "LegendCounts",
]
