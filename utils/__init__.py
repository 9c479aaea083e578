"""Shared helpers: structured logging and content fingerprints."""
from .fingerprint import crc32c, canonical_encode, fingerprint, callable_label
from .logging import get_logger, format_metrics, log_metric, log_metrics

__all__ = [
    "crc32c",
    "canonical_encode",
    "fingerprint",
    "callable_label",
    "get_logger",
    "format_metrics",
    "log_metric",
    "log_metrics",
]
