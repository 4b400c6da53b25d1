from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

try:  # pragma: no cover - unavailable on Windows
    import resource
except ImportError:  # pragma: no cover - depends on platform
    resource = None  # type: ignore

from bktreex import config as bx_config


def _read_rss_bytes() -> int | None:
    try:
        with open("/proc/self/statm", "r", encoding="utf-8") as handle:
            contents = handle.readline().strip().split()
        if len(contents) >= 2:
            rss_pages = int(contents[1])
            page_size = os.sysconf("SC_PAGE_SIZE")
            return int(rss_pages * page_size)
    except (OSError, ValueError, AttributeError):
        pass
    if resource is None:  # pragma: no cover - Windows fallback
        return None
    usage = resource.getrusage(resource.RUSAGE_SELF)
    if getattr(usage, "ru_maxrss", 0):
        return int(usage.ru_maxrss * 1024)
    return None


def _cpu_user_seconds() -> float | None:
    if resource is None:  # pragma: no cover - Windows fallback
        return None
    return float(resource.getrusage(resource.RUSAGE_SELF).ru_utime)


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.3f}"
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class OperationLog:
    """Metadata collected while an operation runs."""

    __slots__ = ("op", "metadata")

    def __init__(self, op: str) -> None:
        self.op = op
        self.metadata: Dict[str, Any] = {}

    def add_metadata(self, **values: Any) -> None:
        self.metadata.update(values)


@contextmanager
def log_operation(
    logger: logging.Logger,
    op: str,
    *,
    level: int = logging.INFO,
) -> Iterator[OperationLog]:
    """Emit a single ``op=<name>`` line with wall time and resource deltas.

    Resource polling is skipped when diagnostics are disabled in the runtime
    configuration; the fields are then reported as ``NA``. Nothing is measured
    when ``logger`` would drop the record anyway.
    """

    op_log = OperationLog(op)
    runtime = bx_config.runtime_config()
    if not logger.isEnabledFor(level):
        yield op_log
        return

    diagnostics = runtime.enable_diagnostics
    cpu_before = _cpu_user_seconds() if diagnostics else None
    rss_before = _read_rss_bytes() if diagnostics else None
    start = time.perf_counter()
    try:
        yield op_log
    finally:
        wall_ms = (time.perf_counter() - start) * 1e3
        cpu_after = _cpu_user_seconds() if diagnostics else None
        rss_after = _read_rss_bytes() if diagnostics else None
        if cpu_before is None or cpu_after is None:
            cpu_field = "NA"
        else:
            cpu_field = f"{(cpu_after - cpu_before) * 1e3:.3f}"
        if rss_before is None or rss_after is None:
            rss_field = "NA"
        else:
            rss_field = str(rss_after - rss_before)
        fields = " ".join(
            f"{key}={_format_value(value)}" for key, value in op_log.metadata.items()
        )
        prefix = f"op={op} {fields}" if fields else f"op={op}"
        logger.log(
            level,
            "%s wall_ms=%.3f cpu_user_ms=%s rss_delta=%s",
            prefix,
            wall_ms,
            cpu_field,
            rss_field,
        )


__all__ = ["OperationLog", "log_operation"]
