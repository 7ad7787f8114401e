"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer. Output is
captured from a themed Console and returned as a string; colour codes are
only emitted when stdout is a terminal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

if TYPE_CHECKING:
    from collections.abc import Callable

    from monitorsvc.services.result import ServiceResult

MONITOR_THEME = Theme(
    {
        "mon.ok": "bold green",
        "mon.error": "bold red",
        "mon.op": "bold cyan",
        "mon.key": "dim",
        "mon.id": "bold blue",
        "mon.revision": "magenta",
    }
)

# Keys whose values are identifiers or revisions.
_ID_KEYS = frozenset({"id", "current", "head"})


def render_result(result: ServiceResult[Any], *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = Console(theme=MONITOR_THEME, highlight=False, width=120)
    with console.capture() as capture:
        if result.ok:
            renderer = _OP_RENDERERS.get(result.op, _render_generic)
            renderer(result, console)
        else:
            _render_error(result, console, verbose=verbose)
        if verbose:
            _render_meta(console, result)
    return capture.get().rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult[Any]) -> None:
    console.print(Text("OK", style="mon.ok"), Text(f"  {result.op}", style="mon.op"))


def _field(console: Console, key: str, value: Any) -> None:
    style = "mon.id" if key in _ID_KEYS else ""
    console.print(Text.assemble((f"  {key}: ", "mon.key"), (str(value), style)))


def _render_meta(console: Console, result: ServiceResult[Any]) -> None:
    """Print meta block including telemetry span tree."""
    if not result.meta:
        return
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    prefix = " " * indent
    duration = span_data.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    console.print(f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {span_data.get('name', '?')}")
    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _render_error(result: ServiceResult[Any], console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err is not None else "Unknown error"
    console.print(Text("ERROR", style="mon.error"), Text(f"  {result.op}", style="mon.op"), msg)
    if verbose and err is not None:
        console.print(Text(f"  kind: {err.kind}", style="dim"))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_generic(result: ServiceResult[Any], console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_upgrade(result: ServiceResult[Any], console: Console) -> None:
    _status_line(console, result)
    pending = result.data.get("pending")
    for key in ("current", "head", "pending_count", "applied_count", "message"):
        if key in result.data:
            _field(console, key, result.data[key])
    if pending:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Revision", style="mon.revision")
        table.add_column("Description")
        for rev in pending:
            summary = rev["description"].splitlines()[0] if rev["description"] else ""
            table.add_row(rev["revision"], summary)
        console.print(table)


def _render_populate(result: ServiceResult[Any], console: Console) -> None:
    _status_line(console, result)
    _field(console, "count", result.data.get("count", 0))
    for monitor_id in result.data.get("ids", []):
        console.print(Text(f"    {monitor_id}", style="mon.id"))


_OP_RENDERERS: dict[str, Callable[[ServiceResult[Any], Console], None]] = {
    "upgrade": _render_upgrade,
    "populate": _render_populate,
}
