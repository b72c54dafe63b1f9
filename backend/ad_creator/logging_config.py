# backend/ad_creator/logging_config.py
import logging
import time
from contextlib import contextmanager
from typing import Dict, Union

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

log = logging.getLogger("ad-creator")

MetricValue = Union[int, float]
_metrics: Dict[str, MetricValue] = {}


def inc_metric(name: str, amount: int = 1) -> None:
    _metrics[name] = int(_metrics.get(name, 0)) + amount


def record_request(operation: str) -> None:
    inc_metric("requests_total")
    inc_metric(f"requests_{operation}")


def record_error(kind: str, operation: str = "-") -> None:
    """Per-kind counter, plus a per-operation one for recognised operation types."""
    inc_metric("errors_total")
    inc_metric(f"errors_{kind}")
    if operation != "-":
        inc_metric(f"errors_{operation}")


def get_metrics_snapshot() -> Dict[str, MetricValue]:
    return dict(_metrics)


def reset_metrics() -> None:
    _metrics.clear()


@contextmanager
def measure(name: str):
    """Time an upstream call; the last duration lands in time_ms_last_<name>."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        log.info(f"⏱️ {name} took {elapsed_ms:.1f}ms")
        _metrics[f"time_ms_last_{name}"] = round(elapsed_ms, 1)
