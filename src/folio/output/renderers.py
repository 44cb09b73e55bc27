"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from folio.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from folio.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="folio.ok")
    op = Text(f"  {result.op}", style="folio.op")
    console.print(Text.assemble(label, op))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = (f"  {key}: ", "folio.key")
    if key == "id":
        v = (str(value), "folio.id")
    elif key == "title":
        v = (str(value), "folio.title")
    else:
        v = (str(value), "")
    console.print(Text.assemble(k, v))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="folio.error")
    op = Text(f"  {result.op}", style="folio.op")
    console.print(Text.assemble(label, op, " - ", msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_post(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    for key in ("id", "title", "created_at"):
        if key in d:
            _field(console, key, d[key])
    for ref in d.get("images", []):
        console.print(Text.assemble(("  image: ", "folio.key"), (ref, "folio.ref")))
    if "body" in d:
        console.print()
        console.print(d["body"], markup=False)


def _render_page(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _status_line(console, result)
    console.print(f"  page {d['page']} of {d['last_page']} ({d['total']} posts)")

    posts = d.get("posts", [])
    if not posts:
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="folio.id", no_wrap=True)
    table.add_column("Title", style="folio.title")
    table.add_column("Images", justify="right")
    table.add_column("Created", style="folio.date")
    for post in posts:
        table.add_row(
            Text(post["id"]),
            Text(post["title"]),
            str(len(post["images"])),
            Text(post["created_at"]),
        )
    console.print(table)


def _render_messages(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    messages = result.data.get("messages", [])
    if not messages:
        console.print("  no messages")
        return

    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("From", style="folio.title")
    if verbose:
        table.add_column("Email")
    table.add_column("Message")
    table.add_column("Date", style="folio.date")
    for msg in messages:
        row = [Text(msg["name"])]
        if verbose:
            row.append(Text(msg["email"]))
        row.extend([Text(msg["message"]), Text(msg["created_at"])])
        table.add_row(*row)
    console.print(table)


_OP_RENDERERS: dict[str, Any] = {
    "get_post": _render_post,
    "get_page": _render_page,
    "recent_messages": _render_messages,
}
