# pathviz/core/config.py
#!/usr/bin/env python3
"""
Runtime configuration.

Every setting is read from an environment variable first and can be
overridden by a ``--name=value`` command-line flag:

    PATHVIZ_ROWS           --rows=15
    PATHVIZ_COLS           --cols=25
    PATHVIZ_ALGORITHM      --algorithm=breadth-first   (bfs / dfs accepted)
    PATHVIZ_VISITED_DELAY  --visited-delay=20          (ms)
    PATHVIZ_PATH_DELAY     --path-delay=50             (ms)
    PATHVIZ_LOG_LEVEL      --log-level=WARNING

Out-of-range dimensions are clamped. Bad algorithm names and delays fall
back to the defaults with a warning.
"""

import logging
import os
import sys
from dataclasses import dataclass, replace
from typing import Dict, Mapping, Optional, Sequence

from pathviz.core.editor import DEFAULT_ROWS, DEFAULT_COLS
from pathviz.core.grid import clamp_dimensions
from pathviz.core.playback import StepDelays, DEFAULT_VISITED_DELAY_MS, DEFAULT_PATH_DELAY_MS
from pathviz.core.types import Algorithm

logger = logging.getLogger(__name__)

ENV_PREFIX = "PATHVIZ_"
SETTINGS = ("rows", "cols", "algorithm", "visited-delay", "path-delay", "log-level")
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


@dataclass(frozen=True)
class AppConfig:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    algorithm: Algorithm = Algorithm.BREADTH_FIRST
    visited_delay: int = DEFAULT_VISITED_DELAY_MS
    path_delay: int = DEFAULT_PATH_DELAY_MS
    log_level: str = "WARNING"

    @property
    def delays(self) -> StepDelays:
        return StepDelays(visited=self.visited_delay, path=self.path_delay)


def _raw_settings(argv: Sequence[str], environ: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for name in SETTINGS:
        env_key = ENV_PREFIX + name.upper().replace("-", "_")
        if env_key in environ:
            raw[name] = environ[env_key]
    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        name, value = arg[2:].split("=", 1)
        if name in SETTINGS:
            raw[name] = value
    return raw


def _delay(raw: Dict[str, str], name: str, default: int) -> int:
    if name not in raw:
        return default
    try:
        value = int(raw[name])
    except ValueError:
        value = -1
    if value < 0:
        logger.warning("ignoring %s=%r, using %d ms", name, raw[name], default)
        return default
    return value


def resolve_config(argv: Optional[Sequence[str]] = None,
                   environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ
    raw = _raw_settings(argv, environ)

    rows, cols = clamp_dimensions(raw.get("rows", DEFAULT_ROWS), raw.get("cols", DEFAULT_COLS))

    algorithm = Algorithm.BREADTH_FIRST
    if "algorithm" in raw:
        try:
            algorithm = Algorithm.parse(raw["algorithm"])
        except ValueError:
            logger.warning("unknown algorithm %r, using %s", raw["algorithm"], algorithm.value)

    level = raw.get("log-level", "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("unknown log level %r, using WARNING", level)
        level = "WARNING"

    return AppConfig(
        rows=rows,
        cols=cols,
        algorithm=algorithm,
        visited_delay=_delay(raw, "visited-delay", DEFAULT_VISITED_DELAY_MS),
        path_delay=_delay(raw, "path-delay", DEFAULT_PATH_DELAY_MS),
        log_level=level,
    )


def override(base: AppConfig, rows, cols, algorithm: str) -> AppConfig:
    """Apply launcher choices on top of ``base``; bad dimensions are clamped."""
    r, c = clamp_dimensions(rows, cols)
    return replace(base, rows=r, cols=c, algorithm=Algorithm.parse(algorithm))


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
