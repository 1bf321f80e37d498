import time
from typing import Any, Mapping, Optional

from core.agents.base_agent import BaseAgent
from core.agents.types import AgentConfig, AgentResult, AgentSource
from core.utils.exceptions import TradeValidationError, create_error_context
from .enricher import enrich_trade
from .validator import validate_trade


class TradeAgent(BaseAgent):
    """Validate-then-enrich pipeline for incoming trades. Results are never cached."""

    capabilities = frozenset({"validate_and_enrich"})

    def __init__(self, config: AgentConfig, **kwargs: Any):
        super().__init__(config, None, **kwargs)

    async def validate_and_enrich(self, trade: Mapping[str, Any]) -> AgentResult:
        start = time.perf_counter()
        try:
            validation = validate_trade(trade)
            if not validation.valid:
                error = TradeValidationError(validation.errors, agent_id=self.config.id)
                self.logger.info("Trade rejected", **create_error_context(error, "validate"))
                return self._result(start, success=False, error=error.message,
                                    violations=tuple(error.violations))
            enriched = enrich_trade(trade)
        except Exception as e:
            self.logger.error("Trade processing failed", **create_error_context(e, "validate_and_enrich"))
            return self._result(start, success=False, error=str(e) or type(e).__name__)

        return self._result(start, success=True, data=enriched)

    def _result(self, start: float, success: bool, data: Any = None, error: Optional[str] = None,
                violations: tuple = ()) -> AgentResult:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.update_metrics(success, elapsed_ms, cache_hit=False, error=error)
        if self.prometheus_metrics:
            self.prometheus_metrics.record_request(
                self.config.id, AgentSource.AGENT.value, success, elapsed_ms / 1000.0
            )
        return AgentResult(
            success=success,
            data=data,
            source=AgentSource.AGENT,
            execution_time_ms=elapsed_ms,
            error=error,
            violations=violations,
        )
