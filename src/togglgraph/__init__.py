# SPDX-License-Identifier: MIT

from togglgraph.cleanup import register_cleanup
from togglgraph.initialize import initialize
from togglgraph.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
