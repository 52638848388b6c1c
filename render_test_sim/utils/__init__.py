"""Shared utilities: exceptions, seeding and component logging."""

from .exceptions import (
    AlreadySetupError,
    ConfigurationError,
    DoubleInitializationError,
    ErrorSeverity,
    NotInitializedError,
    RenderTestSimError,
    ResourceMissingError,
    StateError,
    UnknownDataKindError,
    ValidationError,
    WaitTimeoutError,
)
from .logging import ComponentType, get_component_logger
from .seeding import GeneratorState, SeededGenerator, get_random_seed, validate_seed

__all__ = [
    "AlreadySetupError",
    "ConfigurationError",
    "DoubleInitializationError",
    "ErrorSeverity",
    "NotInitializedError",
    "RenderTestSimError",
    "ResourceMissingError",
    "StateError",
    "UnknownDataKindError",
    "ValidationError",
    "WaitTimeoutError",
    "ComponentType",
    "get_component_logger",
    "GeneratorState",
    "SeededGenerator",
    "get_random_seed",
    "validate_seed",
]
