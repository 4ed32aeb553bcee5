from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from rich.console import Console
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from .config_loader import LoadedMachine, builtin_machines, load_example_machines, load_machine
from .machine import ExecutionError, TuringMachine
from .render import describe_result, render_status, render_tape, render_transitions
from .run_logger import JSONLogger, result_entry
from .settings import load_settings

console = Console()

NAVIGATION = {"n": 1, "p": -1}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulador de Máquinas de Turing deterministas de una cinta",
    )
    parser.add_argument(
        "machine",
        type=Path,
        nargs="?",
        help="Ruta al archivo JSON o YAML que describe la máquina",
    )
    parser.add_argument("--example", "-e", help="Nombre de una máquina de ejemplo incluida")
    parser.add_argument(
        "--list-examples",
        action="store_true",
        help="Muestra las máquinas de ejemplo disponibles",
    )
    parser.add_argument(
        "--string",
        "-s",
        dest="strings",
        action="append",
        help="Cadena específica que se desea simular. Puede repetirse",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Número máximo de pasos antes de considerar que la máquina no se detiene",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Imprime la configuración de cada paso",
    )
    parser.add_argument(
        "--visual",
        action="store_true",
        help="Recorre la ejecución paso a paso de forma interactiva",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Devuelve la salida en formato JSON para facilitar el post-procesamiento",
    )
    parser.add_argument("--settings", type=Path, help="Archivo YAML de configuración")
    parser.add_argument("--log-dir", help="Directorio donde registrar las ejecuciones (JSON Lines)")
    return parser


def available_machines(examples_directory: Optional[str] = None) -> Dict[str, LoadedMachine]:
    machines = load_example_machines(examples_directory)
    return machines or builtin_machines()


def print_examples(machines: Dict[str, LoadedMachine]) -> None:
    table = Table(title="Máquinas de ejemplo")
    table.add_column("Nombre")
    table.add_column("Descripción")
    table.add_column("Estados", justify="right")
    for name, loaded in sorted(machines.items()):
        table.add_row(name, loaded.display_name, str(len(loaded.definition.states)))
    console.print(table)


def run_visual_mode(machine: TuringMachine, input_string: str, max_steps: int, window: int = 10) -> int:
    """Navega por las instantáneas sin volver a ejecutar la máquina.

    Devuelve el índice del último paso mostrado.
    """

    snapshots = machine.execute_step_by_step(input_string, max_steps)
    current = 0
    last = len(snapshots) - 1
    while True:
        console.clear()
        snapshot = snapshots[current]
        pending = machine.pending_transition(snapshot)
        console.print(render_transitions(machine.definition, snapshot.state, pending))
        console.print(render_tape(snapshot, machine.definition.blank_symbol, window))
        console.print(f"Paso {current}/{last}  estado: {snapshot.state}", markup=False)
        console.print(render_status(machine, snapshot, current == last))

        choice = Prompt.ask(
            escape("[n] siguiente, [p] anterior, [f] inicio, [l] final, [j] ir a paso, [q] salir"),
            choices=["n", "p", "f", "l", "j", "q"],
            default="n",
        )
        if choice == "q":
            return current
        if choice == "f":
            current = 0
        elif choice == "l":
            current = last
        elif choice == "j":
            step = IntPrompt.ask(f"Paso (0-{last})", default=current)
            if 0 <= step <= last:
                current = step
            else:
                console.print(Text(f"Paso fuera de rango: {step}", style="red"))
        else:
            current = min(max(current + NAVIGATION[choice], 0), last)


def _json_payload(
    machine: TuringMachine,
    strings: List[str],
    max_steps: int,
    trace: bool,
    logger: Optional[JSONLogger],
    name: str,
) -> Dict[str, Dict]:
    payload: Dict[str, Dict] = {}
    for input_string in strings:
        try:
            result = machine.execute(input_string, max_steps)
        except ExecutionError as error:
            payload[input_string] = {"error": str(error)}
            continue
        entry = result_entry(name, input_string, result)
        if logger is not None:
            logger.log(entry)
        entry = {key: value for key, value in entry.items() if key not in ("timestamp", "machine", "input")}
        if trace:
            entry["snapshots"] = [
                {
                    "step": snapshot.step,
                    "state": snapshot.state,
                    "head_position": snapshot.head_position,
                    "tape": snapshot.tape_string,
                }
                for snapshot in machine.execute_step_by_step(input_string, max_steps)
            ]
        payload[input_string] = entry
    return payload


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.settings)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as error:
        parser.error(str(error))

    machines = available_machines(settings["examples_directory"])
    if args.list_examples:
        print_examples(machines)
        return 0

    if args.machine is not None:
        try:
            loaded = load_machine(args.machine)
        except (OSError, ValueError, yaml.YAMLError) as error:
            console.print(Text(f"Error al cargar la máquina: {error}", style="red"))
            return 1
    elif args.example is not None:
        if args.example not in machines:
            parser.error(f"Ejemplo desconocido {args.example!r}. Disponibles: {', '.join(sorted(machines))}")
        loaded = machines[args.example]
    else:
        parser.error("Indique un archivo de máquina o use --example")

    max_steps = args.max_steps if args.max_steps is not None else settings["max_steps"]
    if max_steps < 0:
        parser.error("--max-steps no puede ser negativo")

    strings = args.strings if args.strings is not None else loaded.simulation_strings
    if not strings:
        parser.error(
            "No se especificaron cadenas para simular. Añada 'simulation_strings' al archivo o use --string",
        )

    log_directory = args.log_dir or settings["log_directory"]
    logger = JSONLogger(log_directory, settings["log_file_prefix"]) if log_directory else None

    machine = TuringMachine(loaded.definition)

    if args.json_output:
        payload = _json_payload(machine, strings, max_steps, args.trace, logger, loaded.name)
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 1 if any("error" in entry for entry in payload.values()) else 0

    exit_code = 0
    console.print(f"[bold cyan]{loaded.display_name}[/bold cyan]")
    for input_string in strings:
        console.rule(escape(f"Cadena '{input_string}'"))
        try:
            if args.visual:
                run_visual_mode(machine, input_string, max_steps, settings["tape_window"])
            result = machine.execute(input_string, max_steps)
        except ExecutionError as error:
            console.print(Text(f"Error: {error}", style="red"))
            exit_code = 1
            continue

        if logger is not None:
            logger.log(result_entry(loaded.name, input_string, result))

        console.print(describe_result(result))
        console.print(f"Motivo: {result.reason.value}")
        console.print(f"Pasos ejecutados: {result.steps}")
        console.print(f"Cinta final: {result.tape!r}", markup=False)
        if args.trace:
            console.print("Descripciones instantáneas:")
            for snapshot in machine.execute_step_by_step(input_string, max_steps):
                console.print(snapshot.format(), markup=False)
        console.print()
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
