from __future__ import annotations

import json
from enum import StrEnum
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table

from dolphin.utils.serialization import to_plain_data


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


def emit(value: Any, *, output: OutputFormat = OutputFormat.JSON, console: Console | None = None) -> None:
    """Render structured output as json, yaml, or a key/value table."""

    plain = to_plain_data(value)
    if output == OutputFormat.JSON:
        print(json.dumps(plain, indent=2))
        return
    if output == OutputFormat.YAML:
        print(yaml.safe_dump(plain, sort_keys=False), end="")
        return

    console = console or Console()
    if not isinstance(plain, dict):
        console.print(str(plain))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("key")
    table.add_column("value")
    for key, val in plain.items():
        if isinstance(val, list):
            val = ", ".join(str(item) for item in val) or "-"
        table.add_row(str(key), "-" if val is None else str(val))
    console.print(table)
