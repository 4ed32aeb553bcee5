from __future__ import annotations

from typing import Optional, Tuple

from rich.table import Table
from rich.text import Text

from .definition import Direction, MachineDefinition, Transition
from .machine import ExecutionResult, ExecutionSnapshot, Outcome, TuringMachine

BLANK_DISPLAY = "_"
ARROWS = {Direction.LEFT: "←", Direction.RIGHT: "→"}


def _visible_range(head_position: int, tape_length: int, window: int) -> Tuple[int, int]:
    if head_position < 0:
        start = head_position - window
    else:
        start = max(head_position - window, 0)
    end = max(min(head_position + window, tape_length - 1), start + 2 * window - 1)
    return start, end


def render_tape(snapshot: ExecutionSnapshot, blank_symbol: str, window: int = 10) -> Text:
    """Cinta alrededor de la cabeza, con indicador y números de posición."""

    start, end = _visible_range(snapshot.head_position, len(snapshot.tape), window)
    cells = Text("Cinta:  ")
    marker = Text("Cabeza: ")
    positions = Text("Pos:    ")
    for index in range(start, end + 1):
        if 0 <= index < len(snapshot.tape) and snapshot.tape[index] != blank_symbol:
            cell = f"[{snapshot.tape[index]}]"
        else:
            cell = f"[{BLANK_DISPLAY}]"
        if index == snapshot.head_position:
            cells.append(cell, style="bold green")
            marker.append(" ^ ", style="bold green")
        else:
            cells.append(cell)
            marker.append("   ")
        positions.append(f"{index:>3}")
    return Text("\n").join([cells, marker, positions])


def render_transitions(
    definition: MachineDefinition,
    current_state: Optional[str] = None,
    pending: Optional[Tuple[str, Transition]] = None,
) -> Table:
    """Tabla de transiciones agrupadas por estado."""

    table = Table(title="Transiciones", show_lines=False)
    table.add_column("")
    table.add_column("Estado")
    table.add_column("Lee")
    table.add_column("Escribe")
    table.add_column("Mueve")
    table.add_column("Siguiente")

    for state in sorted(definition.states):
        for symbol, transition in definition.transitions_from(state):
            is_pending = (
                pending is not None
                and state == current_state
                and pending == (symbol, transition)
            )
            if is_pending:
                style = "bold green"
            elif state == current_state:
                style = "yellow"
            else:
                style = None
            table.add_row(
                "▶" if is_pending else "",
                state,
                symbol,
                transition.write_symbol,
                ARROWS[transition.direction],
                transition.next_state,
                style=style,
            )
    return table


def render_status(machine: TuringMachine, snapshot: ExecutionSnapshot, is_last: bool) -> Text:
    definition = machine.definition
    if definition.is_accepting(snapshot.state):
        return Text(f"✓ ACEPTA en el estado {snapshot.state}", style="bold green")
    if definition.is_rejecting(snapshot.state):
        return Text(f"✗ RECHAZA en el estado {snapshot.state}", style="bold red")
    if is_last:
        if machine.pending_transition(snapshot) is not None:
            return Text("Límite de pasos alcanzado sin detenerse", style="bold yellow")
        return Text(
            f"✗ RECHAZA: no hay transición para el estado {snapshot.state}",
            style="bold red",
        )
    return Text(f"En ejecución (paso {snapshot.step})", style="cyan")


def describe_result(result: ExecutionResult) -> Text:
    if result.outcome is Outcome.ACCEPTED:
        return Text(f"✓ ACEPTA (se detiene en el estado {result.final_state})", style="bold green")
    if result.outcome is Outcome.REJECTED:
        return Text(f"✗ RECHAZA (estado final: {result.final_state})", style="bold red")
    return Text(
        f"? SIN DETERMINAR: no se detuvo tras {result.steps} pasos (estado: {result.final_state})",
        style="bold yellow",
    )
