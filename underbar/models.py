"""
underbar - Pydantic Models

Option and settings models for the function decorators and the library
configuration layer.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CollectionShape(str, Enum):
    """Collection shapes accepted by every collection operation"""
    SEQUENCE = "sequence"
    MAPPING = "mapping"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DelayOptions(BaseModel):
    """Options for delay() and defer()"""
    wait_ms: float = Field(
        0.0,
        description="Minimum time to wait before calling, in milliseconds",
        ge=0.0
    )

    @property
    def wait_seconds(self) -> float:
        return self.wait_ms / 1000.0


class ThrottleOptions(BaseModel):
    """Options for throttle()"""
    wait_ms: float = Field(
        ...,
        description="Length of the throttle window in milliseconds",
        ge=0.0
    )
    leading: bool = Field(
        True,
        description="Invoke on the leading edge of a quiet period"
    )
    trailing: bool = Field(
        True,
        description="Invoke once with the latest arguments at the window boundary"
    )

    @model_validator(mode="after")
    def validate_edges(self):
        """At least one edge must invoke the function."""
        if not self.leading and not self.trailing:
            raise ValueError("leading and trailing cannot both be disabled")
        return self

    @property
    def wait_seconds(self) -> float:
        return self.wait_ms / 1000.0


class UnderbarSettings(BaseModel):
    """Library settings, usually loaded from the environment"""
    log_level: LogLevel = Field(
        LogLevel.INFO,
        description="Level applied by configure_logging()"
    )
    daemon_timers: bool = Field(
        True,
        description="Run delay/throttle timers as daemon threads"
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "log_level": "DEBUG",
                "daemon_timers": True
            }
        }
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case"""
        if isinstance(v, str):
            return v.strip().upper()
        return v
