# SPDX-License-Identifier: MIT

from yizhi.initialize import initialize
from yizhi.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
