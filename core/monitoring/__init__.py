"""
Monitoring components for the agent layer
"""

from .prometheus_metrics import AgentPrometheusMetrics

__all__ = [
    "AgentPrometheusMetrics",
]
