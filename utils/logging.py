"""Logging for the gauge engine (stdlib logging only).

Loggers live under the "gauge" namespace: modules call
get_logger("gauge.<module>") and inherit the single handler installed on the
top-level logger. Numerical results are reported as one "key=value" line so
runs can be diffed.

Public API
- get_logger(name="gauge", level=logging.INFO) -> logging.Logger
- format_metrics(metrics, step=None) -> str
- log_metric(name, value, step=None, logger=None) -> None
- log_metrics(metrics, step=None, logger=None) -> None
"""
from __future__ import annotations

import logging
import math
from typing import Mapping, Optional

_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"
_HANDLER_FLAG = "_gauge_handler"


def get_logger(name: str = "gauge", level: int = logging.INFO) -> logging.Logger:
    """
    Logger for `name`.

    A top-level name gets exactly one StreamHandler (tagged with _gauge_handler,
    so repeated calls do not stack handlers) and stops propagating to the root.
    Dotted names are returned untouched and propagate to their parent.
    """
    logger = logging.getLogger(name)
    if "." in name:
        return logger

    logger.setLevel(int(level))
    logger.propagate = False
    if not any(getattr(h, _HANDLER_FLAG, False) for h in logger.handlers):
        handler = logging.StreamHandler()
        setattr(handler, _HANDLER_FLAG, True)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    return logger


def _finite(x: object, what: str) -> float:
    try:
        val = float(x)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise TypeError(f"{what} must be a real number, got {type(x).__name__}") from e
    if not math.isfinite(val):
        raise ValueError(f"{what} must be finite, got {val}")
    return val


def _pair(key: object, value: object) -> str:
    if not isinstance(key, str) or not key:
        raise ValueError("metric names must be non-empty strings")
    return f"{key}={_finite(value, repr(key)):.10g}"


def _step_suffix(step: Optional[int]) -> str:
    return "" if step is None else f" step={int(_finite(step, 'step'))}"


def format_metrics(metrics: Mapping[str, float], step: Optional[int] = None) -> str:
    """'k1=v1 k2=v2 ... [step=N]' with keys sorted; values must be finite."""
    if not isinstance(metrics, Mapping) or not metrics:
        raise ValueError("metrics must be a non-empty mapping of name -> value")
    body = " ".join(_pair(k, metrics[k]) for k in sorted(metrics))
    return body + _step_suffix(step)


def log_metric(
    name: str,
    value: float,
    step: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Log 'metric name=value [step=N]' at INFO."""
    line = _pair(name, value) + _step_suffix(step)
    (logger or get_logger()).info("metric %s", line)


def log_metrics(
    metrics: Mapping[str, float],
    step: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Log 'metrics k1=v1 k2=v2 ... [step=N]' at INFO."""
    (logger or get_logger()).info("metrics %s", format_metrics(metrics, step))


__all__ = ["get_logger", "format_metrics", "log_metric", "log_metrics"]
