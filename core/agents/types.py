from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class AgentSource(str, Enum):
    AGENT = "agent"
    FALLBACK = "fallback"


class AgentConfig(BaseModel):
    """Static agent configuration, supplied at construction and never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    enabled: bool = True
    priority: int = 0
    timeout_ms: int = Field(default=5000, gt=0)


@dataclass(frozen=True)
class AgentResult(Generic[T]):
    """Outcome of a single agent call.

    ``source`` tells whether the optimized path or the fallback produced the data.
    ``violations`` is only populated by agents that validate input.
    """

    success: bool
    data: Optional[T]
    source: AgentSource
    execution_time_ms: float
    cache_hit: Optional[bool] = None
    error: Optional[str] = None
    violations: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "data": self.data,
            "source": self.source.value,
            "execution_time_ms": self.execution_time_ms,
            "cache_hit": self.cache_hit,
            "error": self.error,
            "violations": list(self.violations),
        }
