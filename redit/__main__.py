"""Redit CLI entry point.

Allows running via `python -m redit` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import os
import sys
from .version import get_version_string

LOG_ENV_VAR = "REDIT_LOG"


def configure_logging() -> None:
    """Send log records to the file named by $REDIT_LOG, if set.

    The terminal belongs to the editor, so nothing is logged to stderr.
    """
    path = os.environ.get(LOG_ENV_VAR)
    if not path:
        logging.getLogger("redit").addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=path,
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    # A single optional filename; --version is the only flag
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    configure_logging()

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor()
    editor.load_init_script()
    if args:
        editor.open(args[0])
    editor.run()


if __name__ == "__main__":  # pragma: no cover
    main()
