"""
Tiny façade over :pymod:`logging` so internal modules can do

```python
from yt_digest.logger import log
log.debug("Hi")
```

and end-users can tweak verbosity via the environment:

```bash
export YTD_LOGLEVEL=DEBUG
```
"""
from __future__ import annotations

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

_ENV = "YTD_LOGLEVEL"

# third-party loggers that are noisy at INFO
_QUIET = ("urllib3", "werkzeug")


def level_for(verbose: int) -> int:
    """Map ``-v`` count to a level: 0 => WARNING, 1 => INFO, >=2 => DEBUG."""
    env_level = os.getenv(_ENV)
    if env_level:
        return getattr(logging, env_level.upper(), logging.INFO)
    return [logging.WARNING, logging.INFO, logging.DEBUG][min(max(verbose, 0), 2)]


def configure_logging(verbose: int = 0) -> None:
    """
    Initialize root logging once. If YTD_LOGLEVEL is set it overrides verbosity.
    """
    root = logging.getLogger()
    if root.handlers:
        return
    level = level_for(verbose)
    handler = RichHandler(
        console=Console(file=sys.stderr),
        show_time=True,
        show_level=True,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(level=level, format="%(name)s › %(message)s", handlers=[handler])

    external_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _QUIET:
        logging.getLogger(name).setLevel(external_level)


log = logging.getLogger("yt_digest")
