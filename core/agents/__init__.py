"""
Agent optimization layer: caching, timeouts, fallback and metrics around domain operations
"""

from .types import AgentConfig, AgentResult, AgentSource
from .cache_store import CacheEntry, CacheStore
from .cost_tracker import CostTracker
from .metrics import AgentMetrics, MetricsRecorder
from .communication_bus import CommunicationBus
from .base_agent import BaseAgent, FALLBACK_CHANNEL
from .orchestrator import Orchestrator

__all__ = [
    "AgentConfig",
    "AgentResult",
    "AgentSource",
    "CacheEntry",
    "CacheStore",
    "CostTracker",
    "AgentMetrics",
    "MetricsRecorder",
    "CommunicationBus",
    "BaseAgent",
    "FALLBACK_CHANNEL",
    "Orchestrator",
]
