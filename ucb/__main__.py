"""Console entry point: ``ucb`` or ``python -m ucb``."""

import sys

from ucb import get_default_cli


def main() -> int:
    cli = get_default_cli()
    return cli.invoke(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
