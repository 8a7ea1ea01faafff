"""FastAPI wrapper for the playlist service."""

import time

from fastapi import FastAPI

from playlist.api import errors, playlists

app = FastAPI(title="Playlist API")
START_TIME = time.time()

errors.install(app)
app.include_router(playlists.router)


@app.get("/api/health")
def health_check():
    from playlist.core import db

    uptime_seconds = int(time.time() - START_TIME)
    db_ok = False
    db_error = None

    try:
        db_ok = db.default_store().ping()
    except Exception as e:
        db_error = str(e)

    return {
        "uptime_seconds": uptime_seconds,
        "database": {
            "connected": db_ok,
            "error": db_error,
        },
    }


def main(host: str | None = None, port: int | None = None):
    import uvicorn

    from playlist.lib import config

    config.configure_logging()
    default_host, default_port = config.api_address()
    uvicorn.run(
        "playlist.api.main:app",
        host=host or default_host,
        port=port or default_port,
        access_log=False,
    )


if __name__ == "__main__":
    main()
