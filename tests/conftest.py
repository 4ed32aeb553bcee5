import pytest

from turing_simulator.config_loader import accept_all_machine, even_ones_machine
from turing_simulator.definition import MachineDefinition
from turing_simulator.machine import TuringMachine


@pytest.fixture
def even_ones():
    return TuringMachine(even_ones_machine())


@pytest.fixture
def accept_all():
    return TuringMachine(accept_all_machine())


@pytest.fixture
def left_mover():
    # primer movimiento a la izquierda y sin transiciones en q1
    definition = MachineDefinition(
        states={"q0", "q1"},
        input_alphabet={"1"},
        tape_alphabet={"1", "_"},
        transitions={("q0", "1"): ("q1", "1", "L")},
        initial_state="q0",
        blank_symbol="_",
    )
    return TuringMachine(definition)


@pytest.fixture
def looper():
    # nunca se detiene: se mueve a la derecha para siempre
    definition = MachineDefinition(
        states={"q0", "accept"},
        input_alphabet={"0"},
        tape_alphabet={"0", "_"},
        transitions={
            ("q0", "0"): ("q0", "0", "R"),
            ("q0", "_"): ("q0", "_", "R"),
        },
        initial_state="q0",
        accept_states={"accept"},
        blank_symbol="_",
    )
    return TuringMachine(definition)
