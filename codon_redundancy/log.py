# log.py

import logging
import sys
from typing import Optional

hbar_stars = '*' * 70

log = logging.getLogger('codon_redundancy')

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


def initialize_logging(logfile: Optional[str] = None, quiet: bool = False) -> None:
    """Sets up console logging and, if requested, a log file."""
    log.setLevel(logging.DEBUG)
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING if quiet else logging.INFO)
    console.setFormatter(formatter)
    log.addHandler(console)

    if logfile is not None:
        filehandler = logging.FileHandler(logfile)
        filehandler.setLevel(logging.DEBUG)
        filehandler.setFormatter(formatter)
        log.addHandler(filehandler)
