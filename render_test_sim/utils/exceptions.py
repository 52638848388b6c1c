"""Exception hierarchy for render_test_sim.

Every condition raised by the package derives from :class:`RenderTestSimError`,
which carries a severity, a unique error id, an optional context mapping and a
recovery suggestion so test failures are self-describing in logs. The simulated
graphics context is the one component that never raises for malformed handles.
"""

from __future__ import annotations

import enum
import logging
import time
import uuid
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

RECOVERY_SUGGESTION_MAX_LENGTH = 500

__all__ = [
    "ErrorSeverity",
    "RenderTestSimError",
    "ValidationError",
    "ResourceMissingError",
    "UnknownDataKindError",
    "StateError",
    "NotInitializedError",
    "AlreadySetupError",
    "DoubleInitializationError",
    "WaitTimeoutError",
    "ConfigurationError",
]


class ErrorSeverity(enum.IntEnum):
    """Severity levels used to pick the log level of a raised error."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    def get_description(self) -> str:
        descriptions = {
            ErrorSeverity.LOW: "Minor issue with suggested improvements",
            ErrorSeverity.MEDIUM: "Recoverable error in a single test",
            ErrorSeverity.HIGH: "Lifecycle error requiring attention",
            ErrorSeverity.CRITICAL: "Critical failure requiring immediate action",
        }
        return descriptions.get(self, "Unknown severity level")

    def should_escalate(self) -> bool:
        return self in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL)


class RenderTestSimError(Exception):
    """Base exception class for all render_test_sim errors.

    Args:
        message: Primary error description.
        context: Optional mapping with debugging details (component, operation, ...).
        severity: :class:`ErrorSeverity` or its name.
        **kwargs: Extra details stored in ``error_details``.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        severity: Union[ErrorSeverity, str] = ErrorSeverity.MEDIUM,
        **kwargs: Any,
    ):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context) if context else {}
        if isinstance(severity, str):
            try:
                self.severity = ErrorSeverity[severity.upper()]
            except KeyError:
                self.severity = ErrorSeverity.MEDIUM
        else:
            self.severity = severity
        self.timestamp = time.time()
        self.error_id = str(uuid.uuid4())
        self.recovery_suggestion: Optional[str] = None
        self.error_details: Dict[str, Any] = {
            k: v for k, v in kwargs.items() if k not in {"message", "context"}
        }
        self.logged = False

    def get_error_details(self) -> Dict[str, Any]:
        """Return a serializable summary of the error for logging and reports."""
        details: Dict[str, Any] = {
            "error_id": self.error_id,
            "message": self.message,
            "timestamp": self.timestamp,
            "severity": self.severity.name,
            "severity_description": self.severity.get_description(),
            "exception_type": self.__class__.__name__,
            "module": self.__class__.__module__,
            "error_details": self.error_details,
        }
        if self.context:
            details["context"] = dict(self.context)
        if self.recovery_suggestion:
            details["recovery_suggestion"] = self.recovery_suggestion
        return details

    def log_error(self, logger: Optional[logging.Logger] = None) -> None:
        """Log the error once at a level matching its severity."""
        if self.logged:
            return
        if logger is None:
            logger = logging.getLogger("render_test_sim.exceptions")

        component = self.context.get("component")
        operation = self.context.get("operation")
        prefix = f"[{component}.{operation}]" if component and operation else ""
        log_message = f"{prefix}[{self.error_id}] {self.message}"
        if self.recovery_suggestion:
            log_message += f" | Suggestion: {self.recovery_suggestion}"

        if self.severity == ErrorSeverity.LOW:
            logger.info(log_message)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning(log_message)
        elif self.severity == ErrorSeverity.HIGH:
            logger.error(log_message)
        else:
            logger.critical(log_message)
        self.logged = True

    def set_recovery_suggestion(self, suggestion: str) -> None:
        if len(suggestion) > RECOVERY_SUGGESTION_MAX_LENGTH:
            suggestion = suggestion[: RECOVERY_SUGGESTION_MAX_LENGTH - 3] + "..."
        self.recovery_suggestion = suggestion
        self.error_details["has_recovery_guidance"] = True

    def add_context(self, key: str, value: Any) -> None:
        if not key or not isinstance(key, str):
            raise ValueError("Context key must be a non-empty string")
        self.context[key] = value


class ValidationError(RenderTestSimError, ValueError):
    """Dataset, option or assertion-expectation violation.

    ``violations`` holds every problem found, not only the first one, so a
    single validation pass can report all duplicate ids of a dataset.
    """

    def __init__(
        self,
        message: str,
        parameter_name: Optional[str] = None,
        parameter_value: Optional[Any] = None,
        expected_format: Optional[str] = None,
        *,
        violations: Optional[Iterable[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context=context, severity=ErrorSeverity.MEDIUM)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value
        self.expected_format = expected_format
        self.violations: List[str] = list(violations) if violations else []
        self.reason = message

        if len(self.violations) > 1:
            self.set_recovery_suggestion(
                f"{len(self.violations)} violations detected; review all of them."
            )
        else:
            self.set_recovery_suggestion(
                "Check the input against the expected format and constraints."
            )

    def get_validation_details(self) -> Dict[str, Any]:
        details = self.get_error_details()
        details.update(
            {
                "parameter_name": self.parameter_name,
                "parameter_value": self.parameter_value,
                "expected_format": self.expected_format,
                "violations": list(self.violations),
            }
        )
        return details


class ResourceMissingError(ValidationError):
    """A validator looked for a resource (scene, renderer, canvas, context) that is absent."""

    def __init__(self, resource: str, message: Optional[str] = None):
        super().__init__(message or f"{resource} not found", parameter_name=resource)
        self.resource = resource
        self.set_recovery_suggestion(
            f"Ensure the test script publishes the {resource.lower()} on the window."
        )


class UnknownDataKindError(ValidationError):
    def __init__(self, kind: Any, supported: Sequence[str]):
        super().__init__(
            f"Unknown test data type: {kind}",
            parameter_name="kind",
            parameter_value=kind,
            expected_format=", ".join(supported),
        )
        self.kind = kind
        self.supported = list(supported)
        self.set_recovery_suggestion(f"Use one of: {', '.join(supported)}")


class StateError(RenderTestSimError):
    """Lifecycle violation of a coordinator, driver or tracker."""

    def __init__(
        self,
        message: str,
        current_state: Optional[str] = None,
        expected_state: Optional[str] = None,
        component_name: Optional[str] = None,
    ):
        super().__init__(
            message,
            context={"component": component_name} if component_name else None,
            severity=ErrorSeverity.HIGH,
        )
        self.current_state = current_state
        self.expected_state = expected_state
        self.component_name = component_name
        self.set_recovery_suggestion(self.suggest_recovery_action())

    def suggest_recovery_action(self) -> str:
        if self.current_state:
            current = self.current_state.lower()
            if "uninitialized" in current or "not_initialized" in current:
                return "Call initialize() or setup() before using this component"
            if "initialized" in current or "setup" in current:
                return "Call cleanup() before initializing again"
        return "Verify component lifecycle state and reinitialize if necessary"


class NotInitializedError(StateError):
    def __init__(self, message: str = "Browser not initialized", component_name: Optional[str] = None):
        super().__init__(
            message,
            current_state="uninitialized",
            expected_state="initialized",
            component_name=component_name,
        )


class AlreadySetupError(StateError):
    def __init__(self, message: str = "Test isolation already setup", component_name: Optional[str] = None):
        super().__init__(
            message,
            current_state="setup",
            expected_state="uninitialized",
            component_name=component_name,
        )


class DoubleInitializationError(AlreadySetupError):
    def __init__(self, message: str = "Browser already initialized", component_name: Optional[str] = None):
        super().__init__(message, component_name=component_name)
        self.current_state = "initialized"


class WaitTimeoutError(RenderTestSimError, TimeoutError):
    """Polling deadline exceeded; carries the elapsed time in milliseconds."""

    def __init__(self, message: str, elapsed_ms: float, timeout_ms: Optional[float] = None):
        super().__init__(
            message,
            severity=ErrorSeverity.MEDIUM,
            elapsed_ms=elapsed_ms,
            timeout_ms=timeout_ms,
        )
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        self.set_recovery_suggestion(
            "Increase the timeout or check that the awaited condition can become true"
        )


class ConfigurationError(RenderTestSimError):
    def __init__(
        self,
        message: str,
        config_parameter: Optional[str] = None,
        parameter_value: Optional[Any] = None,
        valid_options: Optional[Sequence[str]] = None,
    ):
        super().__init__(message, severity=ErrorSeverity.HIGH)
        self.config_parameter = config_parameter
        self.parameter_value = parameter_value
        self.valid_options = list(valid_options) if valid_options else []
        if self.valid_options and config_parameter:
            self.set_recovery_suggestion(
                f"Use valid options for {config_parameter}: {self.valid_options[:5]}"
            )
        else:
            self.set_recovery_suggestion(
                "Check configuration parameters against config/constants.yaml"
            )
