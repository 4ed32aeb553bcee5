from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any, Dict, Iterable

from .machine import ExecutionResult


class JSONLogger:
    """Registro de ejecuciones en formato JSON Lines, un archivo por día (UTC)."""

    def __init__(self, output_directory: str = "logs/", log_file_prefix: str = "turing_") -> None:
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.current_log = self._get_log_filename()

    def _get_log_filename(self) -> str:
        today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        return os.path.join(self.output_directory, f"{self.log_file_prefix}{today}.jsonl")

    def log(self, entry: Dict[str, Any]) -> None:
        with open(self.current_log, "a", encoding="utf-8") as handle:
            handle.write(json.dumps(entry, ensure_ascii=False) + "\n")

    def log_batch(self, entries: Iterable[Dict[str, Any]]) -> None:
        with open(self.current_log, "a", encoding="utf-8") as handle:
            for entry in entries:
                handle.write(json.dumps(entry, ensure_ascii=False) + "\n")

    def rotate(self) -> None:
        """Fuerza el cálculo del archivo de registro actual."""
        self.current_log = self._get_log_filename()


def result_entry(machine_name: str, input_string: str, result: ExecutionResult) -> Dict[str, Any]:
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "machine": machine_name,
        "input": input_string,
        "outcome": result.outcome.value,
        "reason": result.reason.name,
        "final_state": result.final_state,
        "steps": result.steps,
        "halted": result.halted,
        "tape": result.tape,
    }
