"""Gym Tracker entrypoint.

Run with:
  python -m gym_tracker --listener 0.0.0.0:3000
"""
import argparse

import uvicorn


def parse_listener(value: str) -> tuple[str, int]:
    host, _, port = value.rpartition(":")
    if not host or not port.isdigit():
        raise argparse.ArgumentTypeError(f"expected HOST:PORT, got {value!r}")
    return host, int(port)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="gym_tracker", description="Tracks gym activities")
    parser.add_argument("-l", "--listener", type=parse_listener, default="0.0.0.0:3000")
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args(argv)

    host, port = args.listener
    uvicorn.run("gym_tracker.main:app", host=host, port=port, reload=args.reload)


if __name__ == "__main__":
    main()
