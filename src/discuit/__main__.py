"""
python -m discuit <cmd>    — API operations
"""

import sys


def main() -> None:
    if len(sys.argv) < 2:
        print("Usage: discuit <initial|me|user|feed|posts> [options]", file=sys.stderr)
        sys.exit(1)

    from .client import main as client_main

    client_main()


if __name__ == "__main__":
    main()
