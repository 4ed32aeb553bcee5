from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .definition import Direction, MachineDefinition, Transition

DEFAULT_BLANK_SYMBOL = "_"
EXAMPLES_DIRECTORY = Path(__file__).parent / "examples"
SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


@dataclass(frozen=True)
class LoadedMachine:
    """Máquina cargada desde un documento, junto con sus metadatos."""

    name: str
    display_name: str
    definition: MachineDefinition
    simulation_strings: List[str] = field(default_factory=list)


def format_display_name(name: str) -> str:
    """Convierte ``even_ones`` en ``Even Ones``."""

    words = name.replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _normalize_config(data: Mapping) -> Mapping:
    """Acepta documentos con o sin el nodo 'machine'."""

    if "machine" in data and isinstance(data["machine"], dict):
        return data["machine"]
    return data


def _single_characters(values: Any, block: str) -> List[str]:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise ValueError(f"El bloque '{block}' debe ser una lista de símbolos.")
    symbols = []
    for entry in values:
        entry = str(entry)
        if len(entry) != 1:
            raise ValueError(f"La entrada '{entry}' de '{block}' debe ser un único carácter.")
        symbols.append(entry)
    return symbols


def _state_name(value: Any, block: str) -> str:
    # YAML convierte on/off/yes/no en booleanos antes de llegar aquí
    if not isinstance(value, str):
        raise ValueError(
            f"El estado {value!r} de '{block}' debe ser una cadena; escríbalo entre comillas en YAML."
        )
    return value


def _string_list(config: Mapping, key: str) -> List[str]:
    values = config.get(key, [])
    if isinstance(values, str):
        return [values]
    if not isinstance(values, (list, tuple)):
        raise ValueError(f"El bloque '{key}' debe ser una lista.")
    return [_state_name(value, key) for value in values]


def _parse_transition(key: str, value: Any) -> tuple:
    if not isinstance(key, str) or "," not in key:
        raise ValueError(f"Clave de transición inválida: {key!r}. Formato esperado 'estado,símbolo'.")
    state, symbol = key.split(",", 1)
    if len(symbol) != 1:
        raise ValueError(f"Símbolo inválido en la clave de transición: {key!r}.")

    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(
            f"Valor de transición inválido para {key!r}: se esperaba [nuevo_estado, símbolo, dirección]."
        )
    next_state = _state_name(value[0], key)
    write_symbol, movement = (str(part) for part in value[1:])
    if len(write_symbol) != 1:
        raise ValueError(f"Símbolo de escritura inválido en la transición {key!r}: {write_symbol!r}.")

    transition = Transition(
        next_state=next_state,
        write_symbol=write_symbol,
        direction=Direction.parse(movement),
    )
    return (state, symbol), transition


def parse_definition(data: Mapping) -> MachineDefinition:
    """Construye y valida una definición a partir de un documento ya decodificado."""

    if not isinstance(data, Mapping):
        raise ValueError("El documento debe describir un objeto mapeo.")
    config = _normalize_config(data)

    for key in ("states", "alphabet", "tape_alphabet", "initial_state", "transitions"):
        if key not in config:
            raise ValueError(f"El campo '{key}' es obligatorio.")

    states = _string_list(config, "states")
    if not states:
        raise ValueError("Debe existir al menos un estado en 'states'.")
    input_alphabet = _single_characters(config["alphabet"], "alphabet")
    tape_alphabet = _single_characters(config["tape_alphabet"], "tape_alphabet")

    blank_symbol = config.get("blank_symbol")
    blank_symbol = DEFAULT_BLANK_SYMBOL if blank_symbol is None else str(blank_symbol)
    if len(blank_symbol) != 1:
        raise ValueError(f"El símbolo en blanco {blank_symbol!r} debe ser un único carácter.")

    transition_block = config["transitions"]
    if not isinstance(transition_block, Mapping):
        raise ValueError("El bloque 'transitions' debe ser un objeto 'estado,símbolo' -> [estado, símbolo, dirección].")

    transitions = dict(_parse_transition(key, value) for key, value in transition_block.items())

    return MachineDefinition(
        states=states,
        input_alphabet=input_alphabet,
        tape_alphabet=tape_alphabet,
        transitions=transitions,
        initial_state=_state_name(config["initial_state"], "initial_state"),
        accept_states=_string_list(config, "accept_states"),
        reject_states=_string_list(config, "reject_states"),
        blank_symbol=blank_symbol,
    )


def _read_document(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        if path.suffix.lower() == ".json":
            return json.load(handle)
        return yaml.safe_load(handle)


def load_machine(path: str | Path) -> LoadedMachine:
    """Carga y valida el archivo JSON o YAML que describe la MT."""

    path = Path(path)
    raw_data = _read_document(path)
    if not isinstance(raw_data, dict):
        raise ValueError(f"El archivo {path.name} debe describir un objeto mapeo.")

    definition = parse_definition(raw_data)
    simulation_strings = raw_data.get("simulation_strings")
    if simulation_strings is None:
        simulation_strings = _normalize_config(raw_data).get("simulation_strings") or []
    if isinstance(simulation_strings, str):
        simulation_strings = [simulation_strings]

    name = str(raw_data.get("name") or path.stem)
    return LoadedMachine(
        name=name,
        display_name=format_display_name(name),
        definition=definition,
        simulation_strings=[str(value) for value in simulation_strings],
    )


def load_example_machines(directory: Optional[str | Path] = None) -> Dict[str, LoadedMachine]:
    """Carga todas las máquinas del directorio; los archivos inválidos se omiten."""

    directory = Path(directory) if directory is not None else EXAMPLES_DIRECTORY
    examples: Dict[str, LoadedMachine] = {}
    if not directory.is_dir():
        return examples
    for path in sorted(directory.iterdir()):
        if path.suffix.lower() not in SUPPORTED_SUFFIXES:
            continue
        try:
            loaded = load_machine(path)
        except (OSError, ValueError, yaml.YAMLError):
            continue
        examples[loaded.name] = loaded
    return examples


def even_ones_machine() -> MachineDefinition:
    """Acepta cadenas binarias con un número par de unos."""

    return MachineDefinition(
        states={"q0", "q1", "accept", "reject"},
        input_alphabet={"0", "1"},
        tape_alphabet={"0", "1", "_"},
        transitions={
            ("q0", "0"): ("q0", "0", "R"),
            ("q0", "1"): ("q1", "1", "R"),
            ("q0", "_"): ("accept", "_", "R"),
            ("q1", "0"): ("q1", "0", "R"),
            ("q1", "1"): ("q0", "1", "R"),
            ("q1", "_"): ("reject", "_", "R"),
        },
        initial_state="q0",
        accept_states={"accept"},
        reject_states={"reject"},
        blank_symbol="_",
    )


def accept_all_machine() -> MachineDefinition:
    """Recorre la entrada sobre {0, 1, a, b} y acepta al llegar al blanco."""

    symbols = ("0", "1", "a", "b")
    transitions = {("q0", symbol): ("q0", symbol, "R") for symbol in symbols}
    transitions[("q0", "_")] = ("accept", "_", "R")
    return MachineDefinition(
        states={"q0", "accept"},
        input_alphabet=set(symbols),
        tape_alphabet=set(symbols) | {"_"},
        transitions=transitions,
        initial_state="q0",
        accept_states={"accept"},
        reject_states=set(),
        blank_symbol="_",
    )


def builtin_machines() -> Dict[str, LoadedMachine]:
    """Máquinas de respaldo cuando no hay ejemplos disponibles en disco."""

    machines = {"accept_all": accept_all_machine(), "even_ones": even_ones_machine()}
    return {
        name: LoadedMachine(name=name, display_name=format_display_name(name), definition=definition)
        for name, definition in machines.items()
    }
