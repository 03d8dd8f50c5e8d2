#!/usr/bin/env python3
"""
Production startup script.

1. Reads PORT / WEB_CONCURRENCY / GUNICORN_THREADS / GUNICORN_TIMEOUT
2. Runs migrations + admin seed (release.py)
3. Starts gunicorn on app.wsgi:app (replaces this process via os.execvp)

Usage:
    python scripts/start.py
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.fairgroup.config import ServerSettings, load_server_settings  # noqa: E402


def gunicorn_argv(server: ServerSettings) -> list[str]:
    return [
        "gunicorn",
        "app.wsgi:app",
        "--bind", f"0.0.0.0:{server.port}",
        "--workers", str(server.workers),
        "--threads", str(server.threads),
        "--timeout", str(server.timeout),
        "--access-logfile", "-",
        "--error-logfile", "-",
    ]


def main() -> None:
    load_dotenv()
    try:
        server = load_server_settings()
    except ValueError as e:
        print(f"ERROR: {e}", flush=True)
        sys.exit(1)

    print(
        f"Server settings: port={server.port} workers={server.workers} "
        f"threads={server.threads} timeout={server.timeout}s",
        flush=True,
    )

    from scripts.release import run_release
    try:
        run_release()
    except Exception as e:
        print(f"Release failed: {e}", flush=True)
        sys.exit(1)

    print("=== Starting FairGroup API ===", flush=True)
    # exec so gunicorn becomes PID 1 and receives signals directly
    os.execvp("gunicorn", gunicorn_argv(server))


if __name__ == "__main__":
    main()
