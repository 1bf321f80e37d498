# Structured exception hierarchy for the agent optimization layer

from typing import Dict, Any, List, Optional
from datetime import datetime, timezone


class AgentError(Exception):
    """Base exception for all agent layer errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None,
                 agent_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.agent_id = agent_id
        self.timestamp = datetime.now(timezone.utc)


class TransientError(AgentError):
    """Failures of the optimized path that the fallback may recover from"""
    pass


class PermanentError(AgentError):
    """Failures that no retry or fallback will fix"""
    pass


# Primary operation errors, converted into fallback attempts
class AgentTimeoutError(TransientError):
    """Primary operation exceeded the agent's configured timeout"""

    def __init__(self, message: str, timeout_ms: int, **kwargs):
        super().__init__(message, **kwargs)
        self.timeout_ms = timeout_ms


class OperationFailure(TransientError):
    """Primary operation raised for any reason other than a timeout"""

    def __init__(self, message: str, cause: Optional[BaseException] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.cause = cause


class FallbackFailure(PermanentError):
    """Both the primary operation and the fallback failed"""

    def __init__(self, message: str, primary_error: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        # Kept for logging only, never surfaced in AgentResult
        self.primary_error = primary_error


# Orchestration misuse
class OrchestrationError(PermanentError):
    """Base class for routing errors raised by the orchestrator"""
    pass


class AgentNotFoundError(OrchestrationError):
    def __init__(self, agent_id: str, **kwargs):
        super().__init__(f"Agent {agent_id} not found", agent_id=agent_id, **kwargs)


class MethodNotFoundError(OrchestrationError):
    def __init__(self, agent_id: str, method: str, **kwargs):
        super().__init__(f"Method {method} not found on agent {agent_id}",
                         agent_id=agent_id, **kwargs)
        self.method = method


class AgentDisabledError(OrchestrationError):
    def __init__(self, agent_id: str, **kwargs):
        super().__init__(f"Agent {agent_id} is disabled", agent_id=agent_id, **kwargs)


# Validation
class TradeValidationError(PermanentError):
    """Trade input violations; returned to callers as a list, not raised"""

    def __init__(self, violations: List[str], **kwargs):
        super().__init__(", ".join(violations), **kwargs)
        self.violations = list(violations)


def is_transient_error(error: Exception) -> bool:
    """
    Determine if an error is a transient failure of the optimized path

    Returns:
        True for transient agent errors and for arbitrary non-agent exceptions
    """
    if isinstance(error, TransientError):
        return True
    return not isinstance(error, AgentError)


def create_error_context(error: Exception, operation: str,
                         additional_context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Create structured error context for logging

    Args:
        error: The exception that occurred
        operation: The operation that failed
        additional_context: Additional context information

    Returns:
        Structured error context dictionary
    """
    context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "operation": operation,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "transient": is_transient_error(error)
    }

    if isinstance(error, AgentError):
        if error.agent_id:
            context["agent_id"] = error.agent_id
        if error.details:
            context["error_details"] = error.details

        if isinstance(error, AgentTimeoutError):
            context["timeout_ms"] = error.timeout_ms

        if isinstance(error, OperationFailure) and error.cause is not None:
            context["cause_type"] = type(error.cause).__name__

        if isinstance(error, FallbackFailure) and error.primary_error:
            context["primary_error"] = error.primary_error

        if isinstance(error, TradeValidationError):
            context["violations"] = error.violations

    if additional_context:
        context.update(additional_context)

    return context
