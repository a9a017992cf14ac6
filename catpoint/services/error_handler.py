"""Error tracking for catpoint components."""

import functools
import threading
import traceback
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
from enum import Enum

from ..config.defaults import SYSTEM_CONSTANTS
from ..logging_config import get_logger

logger = get_logger("error_handler")


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComponentStatus(Enum):
    """Component status levels."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAILED = "failed"
    UNKNOWN = "unknown"


@dataclass
class ErrorRecord:
    """Record of an error occurrence."""
    component_name: str
    error: Exception
    severity: ErrorSeverity
    timestamp: datetime = field(default_factory=datetime.now)
    traceback_str: str = ""

    @property
    def error_type(self) -> str:
        return type(self.error).__name__


class ErrorHandler:
    """Central registry of component errors and component health."""

    def __init__(self, max_error_history: int = SYSTEM_CONSTANTS["MAX_ERROR_HISTORY"]):
        self.max_error_history = max_error_history
        self.error_history: List[ErrorRecord] = []
        self.component_error_counts: Dict[str, int] = {}
        self.component_status: Dict[str, ComponentStatus] = {}
        self.system_degraded = False
        self.degradation_start_time: Optional[datetime] = None
        self._lock = threading.Lock()

    def register_component(self, component_name: str) -> None:
        """Register a component for error tracking."""
        with self._lock:
            self.component_error_counts.setdefault(component_name, 0)
            self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)
        logger.debug(f"Component registered: {component_name}")

    def handle_error(self, component_name: str, error: Exception,
                     severity: ErrorSeverity = ErrorSeverity.MEDIUM) -> ErrorRecord:
        """Record an error raised by a component and update its status."""
        error_record = ErrorRecord(
            component_name=component_name,
            error=error,
            severity=severity,
            traceback_str=traceback.format_exc()
        )

        with self._lock:
            self.error_history.append(error_record)
            if len(self.error_history) > self.max_error_history:
                del self.error_history[:len(self.error_history) - self.max_error_history]

            self.component_error_counts[component_name] = \
                self.component_error_counts.get(component_name, 0) + 1

            if severity == ErrorSeverity.CRITICAL:
                self.component_status[component_name] = ComponentStatus.FAILED
                self.system_degraded = True
                if self.degradation_start_time is None:
                    self.degradation_start_time = datetime.now()
            elif severity == ErrorSeverity.HIGH:
                self.component_status[component_name] = ComponentStatus.DEGRADED
            else:
                self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)

        logger.error(f"Error in {component_name}: {error} (Severity: {severity.value})")
        return error_record

    def is_recorded(self, error: Exception) -> bool:
        """Check if this exception object was the last one recorded."""
        with self._lock:
            return bool(self.error_history) and self.error_history[-1].error is error

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics."""
        with self._lock:
            return {
                "total_errors": len(self.error_history),
                "component_error_counts": dict(self.component_error_counts),
                "system_degraded": self.system_degraded
            }

    def get_component_health(self) -> Dict[str, ComponentStatus]:
        """Get health status of all registered components."""
        with self._lock:
            return dict(self.component_status)

    def is_system_degraded(self) -> bool:
        return self.system_degraded

    def reset_error_counts(self, component_name: Optional[str] = None) -> None:
        """Reset error counts for a component or all components."""
        with self._lock:
            components = [component_name] if component_name else list(self.component_error_counts)
            for component in components:
                if component in self.component_error_counts:
                    self.component_error_counts[component] = 0
                    self.component_status[component] = ComponentStatus.HEALTHY

            if not any(status == ComponentStatus.FAILED for status in self.component_status.values()):
                self.system_degraded = False
                self.degradation_start_time = None

    def clear_error_history(self) -> None:
        """Forget recorded errors, keeping component registrations."""
        with self._lock:
            self.error_history.clear()

    def get_error_summary(self, hours: int = 24) -> Dict[str, Any]:
        """Get summary of errors in the last N hours."""
        cutoff_time = datetime.now() - timedelta(hours=hours)

        with self._lock:
            recent_errors = [e for e in self.error_history if e.timestamp >= cutoff_time]

        component_counts: Dict[str, int] = {}
        severity_counts = {severity.value: 0 for severity in ErrorSeverity}

        for error in recent_errors:
            component_counts[error.component_name] = component_counts.get(error.component_name, 0) + 1
            severity_counts[error.severity.value] += 1

        return {
            "total_errors": len(recent_errors),
            "component_counts": component_counts,
            "severity_counts": severity_counts,
            "time_period_hours": hours
        }


# Create global error handler instance
global_error_handler = ErrorHandler()


def with_error_handling(component_name: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                        reraise: bool = False, error_handler: Optional[ErrorHandler] = None):
    """Decorator that records exceptions raised by the wrapped function.

    Critical errors, and any error when ``reraise`` is set, propagate to
    the caller unchanged; other errors make the call return None.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                handler = error_handler or global_error_handler
                # Nested decorated calls see the same exception on its way out
                if not handler.is_recorded(e):
                    handler.handle_error(component_name, e, severity)
                if reraise or severity == ErrorSeverity.CRITICAL:
                    raise
                return None
        return wrapper
    return decorator
