# taskninja/logging_setup.py
import logging
from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

# handlers installed by setup_logging, replaced on the next call
_installed: List[logging.Handler] = []


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[Path] = None,
) -> None:
    """
    Configure logging for one CLI invocation:
    - Console: rich handler on stderr at the requested level
    - File (optional): everything from DEBUG up

    Safe to call more than once; handlers from a previous call are replaced.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    while _installed:
        h = _installed.pop()
        root.removeHandler(h)
        h.close()

    console = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(console)
    _installed.append(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DATEFMT))
        root.addHandler(fh)
        _installed.append(fh)

    # dateparser is chatty at DEBUG
    logging.getLogger("dateparser").setLevel(logging.WARNING)
