"""Run logs for regulon-pruner commands.

Each command run writes its own log file under ``<out>/logs`` and appends a
YAML record (command, inputs, settings, outcome) to ``<out>/logs/runs.yaml``
so an output directory documents how it was produced.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

PathLike = Union[str, Path]

LOG_DIRNAME = "logs"
RUNS_FILENAME = "runs.yaml"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def start_run_log(
    command: str,
    output_dir: PathLike,
    level: int = logging.INFO,
) -> Tuple[logging.Logger, Path]:
    """Open a file logger for one run of ``command``.

    The log goes to ``<output_dir>/logs/<command>_<YYYYmmdd_HHMMSS>.log``.
    Earlier runs keep their files; file handlers left from a previous run
    in the same process are closed.

    Parameters
    ----------
    command : str
        Command name ("assign", "score")
    output_dir : PathLike
        Command output directory
    level : int
        Logging level (default: INFO)

    Returns
    -------
    Tuple[logging.Logger, Path]
        Logger and the path of its log file
    """
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = Path(output_dir) / LOG_DIRNAME / f"{command}_{stamp}.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(f"regulon_pruner.run.{command}")
    logger.setLevel(level)
    # Engine progress stays in the run log, not on the console
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger, log_path


def record_run(output_dir: PathLike, command: str, **fields: Any) -> Path:
    """Append one run record to ``<output_dir>/logs/runs.yaml``.

    Records are separate YAML documents, readable with
    ``yaml.safe_load_all``.

    Parameters
    ----------
    output_dir : PathLike
        Command output directory
    command : str
        Command name
    **fields
        Run details (paths, settings, counts, status)

    Returns
    -------
    Path
        Path of the runs file
    """
    record: Dict[str, Any] = {
        "command": command,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
    }
    record.update({key: _plain(value) for key, value in fields.items()})

    runs_path = Path(output_dir) / LOG_DIRNAME / RUNS_FILENAME
    runs_path.parent.mkdir(parents=True, exist_ok=True)
    with runs_path.open("a", encoding="utf-8") as handle:
        handle.write("---\n")
        yaml.safe_dump(record, handle, sort_keys=False)
    return runs_path


def _plain(value: Any) -> Any:
    """Make paths and tuples safe for yaml.safe_dump."""
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value
