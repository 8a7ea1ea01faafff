"""Channel playlists with fingerprint-guarded ordered mutations."""

__version__ = "0.1.0"
