"""
CLI entry point for dirflatten.
"""

import os
import sys

from dirflatten import __version__
from dirflatten.flattener import FlattenError, flatten_tree

# ANSI color codes (no external dependencies)
RESET = "\033[0m"
BOLD = "\033[1m"
GREEN = "\033[32m"
RED = "\033[31m"
CYAN = "\033[36m"
DIM = "\033[2m"


def supports_color() -> bool:
    if os.environ.get("NO_COLOR") is not None:
        return False
    if os.environ.get("FORCE_COLOR") is not None:
        return True
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _c(text: str, *codes: str) -> str:
    if not supports_color():
        return text
    return "".join(codes) + text + RESET


# ─── Help ──────────────────────────────────────────────────────────────────

def print_help() -> None:
    print(
        f"""
{_c("dirflatten", BOLD, CYAN)} {_c(f"v{__version__}", DIM)} - Encode each file's directory path into its name

{_c("USAGE", BOLD)}
  dirflatten <directory> [options]

{_c("OPTIONS", BOLD)}
  --verbose, -v    Print every directory visited and every file renamed
  --version        Print the version and exit
  --help, -h       Show this help message

{_c("RULES", BOLD)}
  - Files are renamed in place:  A/B/C/file.txt -> A/B/C/a - b - c - file.txt
  - Names are lowercased; one leading '+' or '-' is dropped from each directory
  - Directories starting with '.' or '_' are not entered
  - Files starting with '.' are never renamed

{_c("EXAMPLES", BOLD)}
  # Flatten a music collection
  dirflatten ~/Music/Albums

  # Show each rename as it happens
  dirflatten ~/Music/Albums --verbose

{_c("WARNING", BOLD)}
  Renames cannot be undone, and running twice prefixes the names again.
"""
    )


# ─── Utilities ─────────────────────────────────────────────────────────────

def print_error(msg: str) -> None:
    print(_c(f"Error: {msg}", RED), file=sys.stderr)


def _print_usage_hint() -> None:
    print("\n  Usage: dirflatten <directory> [options]", file=sys.stderr)
    print("  Run 'dirflatten --help' for details.", file=sys.stderr)


# ─── Argument Parsing ──────────────────────────────────────────────────────

def parse_args(args: list) -> dict:
    """Parse command-line arguments. Exits on usage errors."""
    opts = {
        "directory": None,
        "verbose": False,
    }

    positional = []
    for arg in args:
        if arg in ("--verbose", "-v"):
            opts["verbose"] = True
        elif arg.startswith("--"):
            print_error(f"Unknown option: {arg}")
            sys.exit(1)
        else:
            positional.append(arg)

    if not positional:
        print_error("Expected an argument")
        _print_usage_hint()
        sys.exit(1)
    if len(positional) > 1:
        print_error(f"expected only 1 argument, not {len(positional)}")
        _print_usage_hint()
        sys.exit(1)

    opts["directory"] = positional[0]
    return opts


# ─── Main ──────────────────────────────────────────────────────────────────

def main() -> None:
    args = sys.argv[1:]

    if "--help" in args or "-h" in args:
        print_help()
        return

    if args and args[0] == "--version":
        print(f"dirflatten {__version__}")
        return

    opts = parse_args(args)
    verbose = opts["verbose"]

    try:
        result = flatten_tree(opts["directory"], verbose=verbose)
    except FlattenError as e:
        print_error(str(e))
        sys.exit(1)

    if verbose:
        print(_c("Done!", GREEN, BOLD))
        print(result.summary())


if __name__ == "__main__":
    main()
