"""Playlist CLI: thin command wrappers delegating to playlist.core."""

import logging
from dataclasses import asdict

import typer

from playlist.core import playlists
from playlist.lib import config

from .errors import error_feedback
from .output import echo_json, echo_text, format_item_row, init_context

app = typer.Typer(no_args_is_help=True, add_completion=False)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output in JSON format."),
    quiet_output: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log operations to stderr."),
):
    """Ordered channel playlists guarded by order fingerprints."""
    init_context(ctx, json_output, quiet_output)
    if verbose:
        config.configure_logging()
    else:
        logging.getLogger("playlist").setLevel(logging.ERROR)


@app.command("init")
@error_feedback
def init_cmd(ctx: typer.Context):
    """Write the default config to ~/.playlist/config.yaml if missing."""
    path = config.init_config()
    echo_json({"config": str(path)}, ctx) or echo_text(f"Config: {path}", ctx)


@app.command("list")
@error_feedback
def list_cmd(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="Channel id"),
    offset: int = typer.Option(0, "--offset", help="Items to skip."),
    limit: int = typer.Option(None, "--limit", help="Page size (1-100)."),
):
    """Show one page of a channel's playlist."""
    page = playlists.get_page(channel, offset=offset, limit=limit)
    if echo_json(
        {
            "items": [asdict(item) for item in page.items],
            "total_count": page.total_count,
            "fingerprint": page.fingerprint,
            "has_more": page.has_more,
            "next_offset": page.next_offset,
        },
        ctx,
    ):
        return

    echo_text(f"{channel}: {page.total_count} items  fingerprint {page.fingerprint}", ctx)
    for item in page.items:
        typer.echo(format_item_row(item))
    if page.has_more:
        echo_text(f"... more from --offset {page.next_offset}", ctx)


@app.command("export")
@error_feedback
def export_cmd(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="Channel id"),
):
    """Print every item of a channel, page by page."""
    items = list(playlists.iter_items(channel))
    if echo_json([asdict(item) for item in items], ctx):
        return
    for item in items:
        typer.echo(format_item_row(item))


@app.command("fingerprint")
@error_feedback
def fingerprint_cmd(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="Channel id"),
):
    """Print the channel's current order fingerprint."""
    current = playlists.current_fingerprint(channel)
    echo_json({"fingerprint": current}, ctx) or typer.echo(current)


@app.command("sync")
@error_feedback
def sync_cmd(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="Channel id"),
    fingerprint: str = typer.Option(..., "--fingerprint", "-f", help="Last known fingerprint."),
):
    """Check a fingerprint against the server's. Exit 1 on conflict."""
    result = playlists.sync_check(channel, fingerprint)
    echo_json({"fingerprint": result.fingerprint}, ctx) or echo_text("In sync", ctx)


@app.command("insert")
@error_feedback
def insert_cmd(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="Channel id"),
    title: str = typer.Argument(..., help="Item title"),
    at: int = typer.Option(..., "--at", help="Target position (0..N)."),
    fingerprint: str = typer.Option(..., "--fingerprint", "-f", help="Last known fingerprint."),
):
    """Insert an item at a position."""
    result = playlists.insert_item(channel, title, at, fingerprint)
    if echo_json({"item": asdict(result.item), "fingerprint": result.fingerprint}, ctx):
        return
    echo_text(f"Inserted {result.item.item_id} at {result.item.position}", ctx)
    echo_text(f"fingerprint {result.fingerprint}", ctx)


@app.command("delete")
@error_feedback
def delete_cmd(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="Channel id"),
    item_id: str = typer.Argument(..., help="Item id"),
    fingerprint: str = typer.Option(..., "--fingerprint", "-f", help="Last known fingerprint."),
):
    """Delete an item."""
    result = playlists.delete_item(channel, item_id, fingerprint)
    if echo_json({"fingerprint": result.fingerprint}, ctx):
        return
    echo_text(f"Deleted {item_id}", ctx)
    echo_text(f"fingerprint {result.fingerprint}", ctx)


@app.command("move")
@error_feedback
def move_cmd(
    ctx: typer.Context,
    channel: str = typer.Argument(..., help="Channel id"),
    item_id: str = typer.Argument(..., help="Item id"),
    to: int = typer.Option(..., "--to", help="Target position (0..N-1)."),
    fingerprint: str = typer.Option(..., "--fingerprint", "-f", help="Last known fingerprint."),
):
    """Move an item to another position."""
    result = playlists.move_item(channel, item_id, to, fingerprint)
    if echo_json({"item": asdict(result.item), "fingerprint": result.fingerprint}, ctx):
        return
    echo_text(f"Moved {item_id} to {result.item.position}", ctx)
    echo_text(f"fingerprint {result.fingerprint}", ctx)


@app.command("serve")
def serve_cmd(
    host: str = typer.Option(None, "--host", help="Bind address."),
    port: int = typer.Option(None, "--port", help="Bind port."),
):
    """Run the HTTP API."""
    from playlist.api.main import main as serve

    serve(host=host, port=port)


def main():
    app()


if __name__ == "__main__":
    main()
