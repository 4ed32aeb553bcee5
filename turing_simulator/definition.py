from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import AbstractSet, List, Mapping, Optional, Tuple, Union


class Direction(str, Enum):
    """Movimiento de la cabeza lectora."""

    LEFT = "L"
    RIGHT = "R"

    @classmethod
    def parse(cls, token: Union[str, "Direction"]) -> "Direction":
        if isinstance(token, Direction):
            return token
        for direction in cls:
            if direction.value == token:
                return direction
        raise ValueError(f"Dirección inválida: {token!r}. Valores permitidos: 'L', 'R'.")

    @property
    def offset(self) -> int:
        return -1 if self is Direction.LEFT else 1


@dataclass(frozen=True)
class Transition:
    """Resultado de la función de transición para un par (estado, símbolo)."""

    next_state: str
    write_symbol: str
    direction: Direction


TransitionKey = Tuple[str, str]
TransitionValue = Union[Transition, Tuple[str, str, Union[str, Direction]]]


class ValidationError(ValueError):
    """La definición viola uno de los invariantes de construcción."""

    def __init__(self, invariant: str, value: object, message: str) -> None:
        super().__init__(message)
        self.invariant = invariant
        self.value = value


def _as_transition(value: TransitionValue) -> Transition:
    if isinstance(value, Transition):
        return value
    next_state, write_symbol, direction = value
    return Transition(next_state, write_symbol, Direction.parse(direction))


@dataclass(frozen=True)
class MachineDefinition:
    """Descripción inmutable y validada de una MT determinista de una cinta.

    Los invariantes se comprueban una única vez, al construir el objeto, en
    este orden: estado inicial, estados de aceptación y rechazo contenidos en
    ``states``, aceptación y rechazo disjuntos y, por último, símbolo en
    blanco dentro del alfabeto de la cinta. La primera violación detiene la
    construcción con un :class:`ValidationError`.
    """

    states: AbstractSet[str]
    input_alphabet: AbstractSet[str]
    tape_alphabet: AbstractSet[str]
    transitions: Mapping[TransitionKey, Transition] = field(hash=False)
    initial_state: str
    accept_states: AbstractSet[str] = field(default_factory=frozenset)
    reject_states: AbstractSet[str] = field(default_factory=frozenset)
    blank_symbol: str = "_"

    def __post_init__(self) -> None:
        states = frozenset(self.states)
        accept_states = frozenset(self.accept_states)
        reject_states = frozenset(self.reject_states)
        tape_alphabet = frozenset(self.tape_alphabet)

        if self.initial_state not in states:
            raise ValidationError(
                "initial_state",
                self.initial_state,
                f"El estado inicial {self.initial_state!r} no pertenece al conjunto de estados.",
            )
        unknown_accept = accept_states - states
        if unknown_accept:
            raise ValidationError(
                "accept_states",
                sorted(unknown_accept),
                f"Los estados de aceptación {sorted(unknown_accept)} no pertenecen al conjunto de estados.",
            )
        unknown_reject = reject_states - states
        if unknown_reject:
            raise ValidationError(
                "reject_states",
                sorted(unknown_reject),
                f"Los estados de rechazo {sorted(unknown_reject)} no pertenecen al conjunto de estados.",
            )
        overlap = accept_states & reject_states
        if overlap:
            raise ValidationError(
                "disjoint",
                sorted(overlap),
                f"Los estados {sorted(overlap)} son a la vez de aceptación y de rechazo.",
            )
        if self.blank_symbol not in tape_alphabet:
            raise ValidationError(
                "blank_symbol",
                self.blank_symbol,
                f"El símbolo en blanco {self.blank_symbol!r} no pertenece al alfabeto de la cinta.",
            )

        transitions = {
            (state, symbol): _as_transition(value)
            for (state, symbol), value in dict(self.transitions).items()
        }

        object.__setattr__(self, "states", states)
        object.__setattr__(self, "input_alphabet", frozenset(self.input_alphabet))
        object.__setattr__(self, "tape_alphabet", tape_alphabet)
        object.__setattr__(self, "transitions", MappingProxyType(transitions))
        object.__setattr__(self, "accept_states", accept_states)
        object.__setattr__(self, "reject_states", reject_states)

    def transition_for(self, state: str, symbol: str) -> Optional[Transition]:
        return self.transitions.get((state, symbol))

    def is_accepting(self, state: str) -> bool:
        return state in self.accept_states

    def is_rejecting(self, state: str) -> bool:
        return state in self.reject_states

    def is_halting(self, state: str) -> bool:
        return self.is_accepting(state) or self.is_rejecting(state)

    def transitions_from(self, state: str) -> List[Tuple[str, Transition]]:
        """Transiciones que salen de ``state`` ordenadas por símbolo leído."""

        return sorted(
            (symbol, transition)
            for (source, symbol), transition in self.transitions.items()
            if source == state
        )
