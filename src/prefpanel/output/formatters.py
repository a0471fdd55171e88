"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich output) or machines
(--json). Rendered documents (``xml`` in the result data) are printed
verbatim in human mode.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from prefpanel.output.console import create_console, get_output

if TYPE_CHECKING:
    from prefpanel.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        code = result.error.code if result.error else "ERROR"
        console.print(f"[pp.error]ERROR[/] [pp.op]{result.op}[/] ({code}): {escape(message)}")
        return get_output(console).rstrip("\n")

    data = dict(result.data)
    xml = data.pop("xml", None)
    if settings.quiet:
        return xml.rstrip("\n") if xml else ""

    console.print(f"[pp.ok]OK[/] [pp.op]{result.op}[/]")
    for key, value in data.items():
        if key == "items":
            for item in value:
                console.print(_format_item(item))
        else:
            console.print(f"  [pp.key]{key}:[/] {escape(_scalar(value))}")
    text = get_output(console).rstrip("\n")
    if xml:
        text = f"{text}\n{xml.rstrip()}"
    return text


def _format_item(item: dict[str, Any]) -> str:
    marker = " [pp.user](user)[/]" if item.get("user_set") else ""
    return (
        f"  [pp.name]{escape(str(item['name']))}[/] = {escape(_scalar(item['value']))}"
        f" [pp.key]({item['kind']})[/]{marker}"
    )


def _scalar(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
