from .config_loader import LoadedMachine, load_machine, parse_definition
from .definition import Direction, MachineDefinition, Transition, ValidationError
from .machine import (
    DEFAULT_MAX_STEPS,
    ExecutionError,
    ExecutionResult,
    ExecutionSnapshot,
    HaltReason,
    InvalidInputSymbol,
    Outcome,
    TuringMachine,
)

__all__ = [
    "DEFAULT_MAX_STEPS",
    "Direction",
    "ExecutionError",
    "ExecutionResult",
    "ExecutionSnapshot",
    "HaltReason",
    "InvalidInputSymbol",
    "LoadedMachine",
    "MachineDefinition",
    "Outcome",
    "Transition",
    "TuringMachine",
    "ValidationError",
    "load_machine",
    "parse_definition",
]
