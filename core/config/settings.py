# Settings for the agent optimization layer
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator
from enum import Enum
from typing import List

from core.agents.types import AgentConfig


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = True
    # Plain text for console by default
    console_json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class MonitoringSettings(BaseModel):
    metrics_enabled: bool = True
    execution_latency_seconds: List[float] = [
        0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0
    ]


# Per-agent defaults; env overrides may set single fields, e.g. AGENTS__AI__TIMEOUT_MS
class AIAgentConfig(AgentConfig):
    id: str = "ai"
    name: str = "AI Integration Agent"
    priority: int = 1
    timeout_ms: int = Field(default=10000, gt=0)


class DatabaseAgentConfig(AgentConfig):
    id: str = "db"
    name: str = "Database Agent"
    priority: int = 2
    timeout_ms: int = Field(default=5000, gt=0)


class TradeAgentConfig(AgentConfig):
    id: str = "trade"
    name: str = "Trade Agent"
    priority: int = 3
    timeout_ms: int = Field(default=2000, gt=0)


class PortfolioAgentConfig(AgentConfig):
    id: str = "portfolio"
    name: str = "Portfolio Agent"
    priority: int = 4
    timeout_ms: int = Field(default=2000, gt=0)


class AgentsSettings(BaseModel):
    """One AgentConfig per registered agent"""
    ai: AIAgentConfig = AIAgentConfig()
    database: DatabaseAgentConfig = DatabaseAgentConfig()
    trade: TradeAgentConfig = TradeAgentConfig()
    portfolio: PortfolioAgentConfig = PortfolioAgentConfig()


class AICacheSettings(BaseModel):
    # Memoizing LLM output assumes the model is near-deterministic for equal inputs.
    # Deployments that cannot accept that turn caching off here.
    enabled: bool = True
    ttl_ms: int = Field(default=30 * 60 * 1000, gt=0)
    max_size: int = Field(default=300, gt=0)
    cost_per_call: float = Field(default=0.02, ge=0.0)


class QueryCacheSettings(BaseModel):
    max_size: int = Field(default=500, gt=0)
    trades_ttl_ms: int = Field(default=2 * 60 * 1000, gt=0)
    portfolio_ttl_ms: int = Field(default=5 * 60 * 1000, gt=0)


class MetricsCacheSettings(BaseModel):
    max_size: int = Field(default=200, gt=0)
    ttl_ms: int = Field(default=5 * 60 * 1000, gt=0)


class Settings(BaseSettings):
    """Main settings, loaded from environment variables"""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore"
    )

    environment: Environment = Environment.DEVELOPMENT

    logging: LoggingSettings = LoggingSettings()
    monitoring: MonitoringSettings = MonitoringSettings()

    agents: AgentsSettings = AgentsSettings()
    ai_cache: AICacheSettings = AICacheSettings()
    query_cache: QueryCacheSettings = QueryCacheSettings()
    metrics_cache: MetricsCacheSettings = MetricsCacheSettings()

    # Coalesce concurrent cache misses on the same key into one computation
    single_flight_enabled: bool = True

    @field_validator("agents")
    @classmethod
    def validate_unique_agent_ids(cls, v: AgentsSettings) -> AgentsSettings:
        """Agent ids are registry keys and must not collide"""
        ids = [v.ai.id, v.database.id, v.trade.id, v.portfolio.id]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate agent ids in configuration: {ids}")
        return v
