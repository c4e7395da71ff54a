"""
Defuse CLI - Command-line interface for the engine.

Usage:
    defuse new [--mode quick] [--difficulty novice] [--seed ABC123]
    defuse solve <seed> [--mode quick] [--difficulty novice]
    defuse serve [--host 127.0.0.1] [--port 8000]
"""

import argparse
import json
import logging
import sys

from . import __version__


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Defuse - Bomb-defusal mission engine",
        prog="defuse",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # New command
    new_parser = subparsers.add_parser("new", help="Generate a mission and print its device")
    _add_mission_args(new_parser)
    new_parser.add_argument("--seed", help="Replay seed (random if omitted)")
    new_parser.add_argument("--json", action="store_true", help="Print the public snapshot as JSON")

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Print every module's answer for a seed")
    solve_parser.add_argument("seed", help="Mission seed")
    _add_mission_args(solve_parser)

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "new":
            cmd_new(args)
        elif args.command == "solve":
            cmd_solve(args)
        elif args.command == "serve":
            cmd_serve(args)
        else:
            parser.print_help()
            sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)


def _add_mission_args(parser):
    parser.add_argument("--mode", default="quick", choices=["quick", "full"])
    parser.add_argument("--difficulty", default="novice", choices=["novice", "pro", "expert"])


def cmd_new(args):
    """Generate a mission and print its summary."""
    from .session import setup_mission

    state = setup_mission(args.mode, args.difficulty, args.seed)

    if args.json:
        print(json.dumps(state.snapshot(), indent=2))
        return

    g = state.globals
    print(f"Seed: {state.seed}")
    print(f"Mode: {state.mode.value}  Difficulty: {state.difficulty.value}")
    print(f"Timer: {state.timer_seconds}s  Max strikes: {state.max_strikes}")
    print(f"Serial: {g.serial}  Batteries: {g.batteries}")
    indicators = " ".join(f"{i.label}{'*' if i.lit else ''}" for i in g.indicators)
    print(f"Indicators: {indicators or '-'}")
    print(f"Ports: {', '.join(g.ports) or '-'}")
    print("\nModules:")
    for m in state.modules:
        print(f"  {m.id}")


def cmd_solve(args):
    """Print every module's answer key for a seed."""
    from .modules import describe_solution
    from .session import setup_mission

    state = setup_mission(args.mode, args.difficulty, args.seed)
    print(f"Seed: {state.seed} ({state.mode.value}/{state.difficulty.value})")
    for m in state.modules:
        print(f"\n{m.id}:")
        for key, value in describe_solution(m, state.globals).items():
            print(f"  {key}: {json.dumps(value)}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    try:
        import uvicorn
    except ImportError:
        print("Error: uvicorn not installed. Install with: pip install defuse-engine[server]")
        sys.exit(1)

    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
