"""CLI error handling: report domain errors instead of tracebacks."""

from functools import wraps

import typer
from click.exceptions import Exit

from playlist.core.errors import FingerprintConflict, PlaylistError

from .output import echo_json


def error_feedback(f):
    """Wrap command to catch exceptions and report them before exiting.

    Domain errors print their code (and the server fingerprint on conflict), as
    JSON in --json mode. Anything else is echoed to stderr. Exit code is 1.
    """

    @wraps(f)
    def wrapper(ctx: typer.Context, *args, **kwargs):
        try:
            return f(ctx, *args, **kwargs)
        except (SystemExit, Exit):
            raise
        except FingerprintConflict as e:
            payload = {"errorCode": e.code, "serverFingerprint": e.server_fingerprint}
            if not echo_json(payload, ctx):
                typer.echo(f"Conflict: playlist changed, server fingerprint {e.server_fingerprint}", err=True)
            raise typer.Exit(1) from e
        except PlaylistError as e:
            if not echo_json({"errorCode": e.code, "message": str(e)}, ctx):
                typer.echo(f"{e.code}: {e}", err=True)
            raise typer.Exit(1) from e
        except (ValueError, KeyError, TypeError) as e:
            typer.echo(f"Invalid input: {e}", err=True)
            raise typer.Exit(1) from e
        except OSError as e:
            typer.echo(f"File error: {e}", err=True)
            raise typer.Exit(1) from e
        except Exception as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from e

    return wrapper
