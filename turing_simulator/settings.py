from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .machine import DEFAULT_MAX_STEPS

DEFAULT_SETTINGS: Dict[str, Any] = {
    "max_steps": DEFAULT_MAX_STEPS,
    "tape_window": 10,
    "examples_directory": None,
    "log_directory": None,
    "log_file_prefix": "turing_",
}

# Tipos esperados para la validación
SETTINGS_SCHEMA = {
    "max_steps": int,
    "tape_window": int,
    "examples_directory": (str, type(None)),
    "log_directory": (str, type(None)),
    "log_file_prefix": str,
}


def validate_settings(settings: Dict[str, Any]) -> None:
    for key, expected_type in SETTINGS_SCHEMA.items():
        if key not in settings:
            raise ValueError(f"Falta la clave de configuración obligatoria: {key}")
        value = settings[key]
        # bool es subclase de int
        if isinstance(value, bool) or not isinstance(value, expected_type):
            raise TypeError(f"La clave '{key}' esperaba {expected_type}, se obtuvo {type(value)}.")

    unknown = sorted(set(settings) - set(SETTINGS_SCHEMA))
    if unknown:
        raise ValueError(f"Claves de configuración desconocidas: {unknown}")
    if settings["max_steps"] < 0:
        raise ValueError("'max_steps' no puede ser negativo.")
    if settings["tape_window"] < 1:
        raise ValueError("'tape_window' debe ser al menos 1.")


def load_settings(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Combina el archivo YAML indicado con los valores por defecto."""

    settings = DEFAULT_SETTINGS.copy()
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No se encontró el archivo de configuración: {path}")
        with path.open("r", encoding="utf-8") as handle:
            user_settings = yaml.safe_load(handle) or {}
        if not isinstance(user_settings, dict):
            raise ValueError("El archivo de configuración debe describir un objeto mapeo.")
        settings.update(user_settings)

    validate_settings(settings)
    return settings
