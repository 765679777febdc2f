"""
orderkey Command Line
=====================
Generate and inspect order keys from a shell.

Usage:
    python -m orderkey COMMAND [args] [options]

Keys are read and printed in hex display form unless --raw is given.
"""

import logging
import sys
from typing import List, Optional, TextIO

from orderkey.key import Key, OrderKeyError


logger = logging.getLogger(__name__)


HELP_TEXT = """
orderkey — order-maintenance keys

Usage:
    python -m orderkey default                   Print the default key
    python -m orderkey before KEY                Key sorting before KEY
    python -m orderkey after KEY                 Key sorting after KEY
    python -m orderkey between LEFT RIGHT        Key strictly between two keys
    python -m orderkey check KEY [KEY ...]       Validate keys, check ascending order

Options:
    --help, -h      Show this help
    --raw           Print the byte form as a Python bytes literal
    --verbose, -v   Enable debug logging

KEY arguments are hex strings, e.g. 80 or 817f80.
"""

# command name -> number of KEY arguments (None = one or more)
COMMANDS = {
    "default": 0,
    "before": 1,
    "after": 1,
    "between": 2,
    "check": None,
}


class UsageError(Exception):
    """Raised on malformed command lines."""
    pass


def print_help(out: Optional[TextIO] = None):
    print(HELP_TEXT, file=out or sys.stdout)


def _format(key: Key, raw: bool) -> str:
    if raw:
        return repr(key.to_bytes())
    return key.to_hex()


def _parse(args: List[str]) -> tuple[str, List[str], dict]:
    """Split argv into (command, positional args, options)."""
    options = {"raw": False, "verbose": False, "help": False}
    positional: List[str] = []

    for arg in args:
        if arg in ("--help", "-h"):
            options["help"] = True
        elif arg == "--raw":
            options["raw"] = True
        elif arg in ("--verbose", "-v"):
            options["verbose"] = True
        elif arg.startswith("-"):
            raise UsageError(f"Unknown option: {arg}")
        else:
            positional.append(arg)

    if options["help"]:
        return "", [], options
    if not positional:
        raise UsageError("Missing command")

    command, rest = positional[0], positional[1:]
    if command not in COMMANDS:
        raise UsageError(f"Unknown command: {command}")

    expected = COMMANDS[command]
    if expected is None and not rest:
        raise UsageError(f"'{command}' needs at least one KEY")
    if expected is not None and len(rest) != expected:
        raise UsageError(f"'{command}' takes {expected} KEY argument(s), got {len(rest)}")
    return command, rest, options


def run(command: str, args: List[str], raw: bool = False,
        out: Optional[TextIO] = None) -> int:
    """Execute a parsed command. Returns the process exit status."""
    out = out or sys.stdout
    keys = [Key.from_hex(a) for a in args]
    logger.debug("Running %s with %d key(s)", command, len(keys))

    if command == "default":
        print(_format(Key.default(), raw), file=out)
    elif command == "before":
        print(_format(Key.new_before(keys[0]), raw), file=out)
    elif command == "after":
        print(_format(Key.new_after(keys[0]), raw), file=out)
    elif command == "between":
        print(_format(Key.new_between(keys[0], keys[1]), raw), file=out)
    elif command == "check":
        for key in keys:
            print(f"{_format(key, raw)}  depth={key.depth}", file=out)
        for i in range(1, len(keys)):
            if not keys[i - 1] < keys[i]:
                print(f"not ascending at position {i}: "
                      f"{keys[i - 1].to_hex()} >= {keys[i].to_hex()}", file=out)
                return 1
        print("ok", file=out)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse CLI arguments and dispatch."""
    args = sys.argv[1:] if argv is None else argv

    try:
        command, rest, options = _parse(args)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        print_help(sys.stderr)
        return 1

    if options["help"]:
        print_help()
        return 0

    if options["verbose"]:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(levelname)s %(name)s: %(message)s")

    try:
        return run(command, rest, raw=options["raw"])
    except OrderKeyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
