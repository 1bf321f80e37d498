from typing import Any, Dict, List, Optional

from core.agents.base_agent import BaseAgent
from core.agents.interfaces import RoutableAgent
from core.agents.types import AgentResult
from core.logging import get_logger
from core.utils.exceptions import AgentDisabledError, AgentNotFoundError, MethodNotFoundError

logger = get_logger(__name__, component="agents")


class Orchestrator:
    """Registry of agents with dispatch by agent id and capability name."""

    def __init__(self):
        self._agents: Dict[str, BaseAgent] = {}

    def register_agent(self, agent: BaseAgent) -> None:
        if not isinstance(agent, RoutableAgent):
            raise TypeError(f"Cannot register {type(agent).__name__}: not a routable agent")
        agent_id = agent.get_id()
        if agent_id in self._agents:
            logger.warning("Replacing registered agent", agent_id=agent_id)
        self._agents[agent_id] = agent
        logger.info("Agent registered", agent_id=agent_id,
                    capabilities=sorted(agent.capabilities))

    def unregister_agent(self, agent_id: str) -> Optional[BaseAgent]:
        return self._agents.pop(agent_id, None)

    def get_agent(self, agent_id: str) -> Optional[BaseAgent]:
        return self._agents.get(agent_id)

    def get_all_agents(self) -> List[BaseAgent]:
        return list(self._agents.values())

    def get_enabled_agents(self) -> List[BaseAgent]:
        """Enabled agents, highest priority (lowest number) first"""
        enabled = [a for a in self._agents.values() if a.is_enabled()]
        return sorted(enabled, key=lambda a: a.config.priority)

    async def route(self, agent_id: str, method: str, *args: Any, **kwargs: Any) -> AgentResult:
        """Call ``method`` on the agent registered under ``agent_id``.

        Raises:
            AgentNotFoundError: no agent with that id
            AgentDisabledError: the agent is configured as disabled
            MethodNotFoundError: ``method`` is not one of the agent's capabilities
        """
        agent = self._agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)
        if not agent.is_enabled():
            raise AgentDisabledError(agent_id)
        if method not in agent.capabilities:
            raise MethodNotFoundError(agent_id, method)
        handler = getattr(agent, method, None)
        if not callable(handler):
            raise MethodNotFoundError(agent_id, method)
        return await handler(*args, **kwargs)

    def get_metrics_report(self) -> Dict[str, Dict[str, Any]]:
        """Metrics snapshot per agent, for the monitoring endpoint"""
        report = {}
        for agent_id, agent in self._agents.items():
            report[agent_id] = {
                "name": agent.config.name,
                "enabled": agent.is_enabled(),
                "priority": agent.config.priority,
                "metrics": agent.get_metrics().to_dict(),
            }
        return report
