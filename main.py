"""Wayfarer dev launcher. Starts the API server in watch mode."""

import argparse
import os
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent
load_dotenv(ROOT / ".env")

HOST = os.getenv("HOST", "0.0.0.0")
BACKEND_PORT = os.getenv("BACKEND_PORT", "13013")


def main():
    parser = argparse.ArgumentParser(description="Wayfarer dev launcher")
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Data storage directory (default: ./data)")
    parser.add_argument("--demo", action="store_true",
                        help="Clean and create demo adventure data")
    parser.add_argument("--port", default=BACKEND_PORT,
                        help=f"API port (default: {BACKEND_PORT})")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "info"),
                        help="uvicorn log level (default: info)")
    args = parser.parse_args()

    if args.demo:
        from wayfarer.config import load_settings
        from wayfarer.demo import create_demo_data
        from wayfarer.storage import Storage

        settings = load_settings(data_dir=args.data_dir)
        adventure = create_demo_data(Storage(settings.data_dir, settings))
        print(f"Created demo adventure {adventure.name!r} (id {adventure.id})")

    # Build env for the server so it picks up the same data dir
    env = os.environ.copy()
    if args.data_dir:
        env["DATA_DIR"] = str(args.data_dir.resolve())

    print(f"Starting API on http://localhost:{args.port} ...")
    proc = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "backend.app:app", "--reload",
         "--host", HOST, "--port", str(args.port), "--log-level", args.log_level.lower()],
        cwd=ROOT, env=env,
    )
    try:
        proc.wait()
    except KeyboardInterrupt:
        print("\nShutting down...")
        proc.terminate()
        proc.wait()


if __name__ == "__main__":
    main()
