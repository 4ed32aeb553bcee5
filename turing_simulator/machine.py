from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .definition import MachineDefinition, Transition

DEFAULT_MAX_STEPS = 10_000


class Outcome(str, Enum):
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    UNDETERMINED = "Undetermined"


class HaltReason(str, Enum):
    """Motivo por el que terminó la simulación."""

    ACCEPT_STATE = "Estado de aceptación alcanzado"
    REJECT_STATE = "Estado de rechazo alcanzado"
    NO_TRANSITION = "No existe transición definida"
    STEP_LIMIT = "Se alcanzó el límite máximo de pasos"


class ExecutionError(ValueError):
    """Error de preparación de una ejecución."""


class InvalidInputSymbol(ExecutionError):
    def __init__(self, symbol: str) -> None:
        super().__init__(f"Símbolo de entrada inválido: {symbol!r}")
        self.symbol = symbol


@dataclass(frozen=True)
class ExecutionResult:
    """Resultado final de la simulación."""

    outcome: Outcome
    final_state: str
    steps: int
    halted: bool
    tape: str
    head_position: int
    reason: HaltReason

    @property
    def accepted(self) -> bool:
        return self.outcome is Outcome.ACCEPTED


@dataclass(frozen=True)
class ExecutionSnapshot:
    """Configuración completa de la MT en un paso concreto de la ejecución."""

    tape: Tuple[str, ...]
    head_position: int
    state: str
    step: int

    @property
    def tape_string(self) -> str:
        return "".join(self.tape)

    def read(self, blank_symbol: str) -> str:
        """Símbolo bajo la cabeza; las celdas aún no materializadas son blancas."""

        if 0 <= self.head_position < len(self.tape):
            return self.tape[self.head_position]
        return blank_symbol

    def format(self) -> str:
        return (
            f"Paso {self.step:04d}: estado={self.state}, cabeza={self.head_position}\n"
            f"  cinta: {self.tape_string}"
        )


class Tape:
    """Cinta infinita hacia ambos lados materializada de forma perezosa.

    Solo existen las celdas visitadas. Cuando la cabeza queda a la izquierda
    del inicio se antepone una celda en blanco y la cabeza pasa al índice 0.
    """

    def __init__(self, blank_symbol: str, initial_input: Iterable[str]) -> None:
        self.blank_symbol = blank_symbol
        self.cells: List[str] = list(initial_input)

    def ensure_cell(self, head_position: int) -> int:
        if head_position < 0:
            self.cells.insert(0, self.blank_symbol)
            head_position = 0
        if head_position >= len(self.cells):
            self.cells.append(self.blank_symbol)
        return head_position

    def read(self, position: int) -> str:
        return self.cells[position]

    def write(self, position: int, symbol: str) -> None:
        self.cells[position] = symbol

    def contents(self) -> str:
        return "".join(self.cells)

    def __len__(self) -> int:
        return len(self.cells)


class _Configuration:
    """Estado mutable propio de una ejecución."""

    def __init__(self, tape: Tape, state: str) -> None:
        self.tape = tape
        self.head_position = 0
        self.state = state
        self.steps = 0

    def snapshot(self) -> ExecutionSnapshot:
        return ExecutionSnapshot(
            tape=tuple(self.tape.cells),
            head_position=self.head_position,
            state=self.state,
            step=self.steps,
        )


class TuringMachine:
    """Simulador de Máquinas de Turing deterministas de una cinta.

    La definición solo se lee; cada llamada crea su propia cinta y contador,
    por lo que una misma instancia puede compartirse entre ejecuciones.
    """

    def __init__(self, definition: MachineDefinition) -> None:
        self.definition = definition

    def _start(self, input_string: str) -> _Configuration:
        for symbol in input_string:
            if symbol not in self.definition.input_alphabet:
                raise InvalidInputSymbol(symbol)
        tape = Tape(self.definition.blank_symbol, input_string)
        return _Configuration(tape, self.definition.initial_state)

    def _step(self, config: _Configuration) -> Optional[HaltReason]:
        """Aplica una transición o devuelve el motivo de parada.

        El orden es relevante: primero los estados de parada, después la
        extensión de la cinta y por último la búsqueda de la transición. La
        ausencia de transición detiene la máquina sin consumir un paso.
        """

        if self.definition.is_accepting(config.state):
            return HaltReason.ACCEPT_STATE
        if self.definition.is_rejecting(config.state):
            return HaltReason.REJECT_STATE

        config.head_position = config.tape.ensure_cell(config.head_position)
        symbol = config.tape.read(config.head_position)
        transition = self.definition.transition_for(config.state, symbol)
        if transition is None:
            return HaltReason.NO_TRANSITION

        config.tape.write(config.head_position, transition.write_symbol)
        config.head_position += transition.direction.offset
        config.state = transition.next_state
        config.steps += 1
        return None

    def execute(self, input_string: str, max_steps: int = DEFAULT_MAX_STEPS) -> ExecutionResult:
        """Ejecuta la máquina hasta que se detenga o agote ``max_steps``."""

        config = self._start(input_string)
        reason = HaltReason.STEP_LIMIT
        while config.steps < max_steps:
            halt = self._step(config)
            if halt is not None:
                reason = halt
                break

        if reason is HaltReason.ACCEPT_STATE:
            outcome = Outcome.ACCEPTED
        elif reason is HaltReason.STEP_LIMIT:
            outcome = Outcome.UNDETERMINED
        else:
            outcome = Outcome.REJECTED

        return ExecutionResult(
            outcome=outcome,
            final_state=config.state,
            steps=config.steps,
            halted=reason is not HaltReason.STEP_LIMIT,
            tape=config.tape.contents(),
            head_position=config.head_position,
            reason=reason,
        )

    def execute_step_by_step(
        self,
        input_string: str,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> List[ExecutionSnapshot]:
        """Devuelve una instantánea por paso, empezando por la configuración inicial."""

        config = self._start(input_string)
        snapshots = [config.snapshot()]
        while config.steps < max_steps:
            halt = self._step(config)
            if halt is None:
                snapshots.append(config.snapshot())
                continue
            if halt is HaltReason.NO_TRANSITION:
                # la cinta pudo materializar una celda antes de fallar la búsqueda
                snapshots[-1] = config.snapshot()
            break
        return snapshots

    def simulate_inputs(
        self,
        inputs: Iterable[str],
        *,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> Dict[str, ExecutionResult]:
        """Ejecuta la MT para cada cadena indicada."""

        results: Dict[str, ExecutionResult] = {}
        for input_string in inputs:
            results[input_string] = self.execute(input_string, max_steps)
        return results

    def pending_transition(self, snapshot: ExecutionSnapshot) -> Optional[Tuple[str, Transition]]:
        """Transición que se aplicaría a continuación desde ``snapshot``."""

        if self.definition.is_halting(snapshot.state):
            return None
        symbol = snapshot.read(self.definition.blank_symbol)
        transition = self.definition.transition_for(snapshot.state, symbol)
        if transition is None:
            return None
        return symbol, transition
