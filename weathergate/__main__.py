"""Run the gateway with uvicorn: ``python -m weathergate``."""

from __future__ import annotations

import argparse

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the weather gateway")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    # Logging is configured by the app's lifespan hook.
    uvicorn.run("weathergate.api.main:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
