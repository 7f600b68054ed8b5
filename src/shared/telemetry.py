import logging
import sys
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

from prometheus_client import REGISTRY, Counter, Histogram

# --- Context for Correlation IDs ---
correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="system")

DURATION_METRIC = "qotd_method_duration_seconds"
SUBMISSIONS_METRIC = "qotd_answers_submitted"


def _get_or_create(name: str, factory: Callable[[], Any]) -> Any:
    """Streamlit re-imports modules on rerun; reuse already registered collectors."""
    try:
        return factory()
    except ValueError:
        collectors = REGISTRY._names_to_collectors
        # Counters register under both "<name>" and "<name>_total"
        return collectors.get(name) or collectors[f"{name}_total"]


METHOD_DURATION = cast(
    Histogram,
    _get_or_create(
        DURATION_METRIC,
        lambda: Histogram(
            DURATION_METRIC, "Time spent in method", ["component", "method"]
        ),
    ),
)

ANSWERS_SUBMITTED = cast(
    Counter,
    _get_or_create(
        SUBMISSIONS_METRIC,
        lambda: Counter(
            SUBMISSIONS_METRIC, "Answers submitted per category", ["category"]
        ),
    ),
)

P = ParamSpec("P")
R = TypeVar("R")


def measure_time(metric_name: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Times an instance method into METHOD_DURATION and logs the duration
    through the instance's `telemetry` attribute, when it has one.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            self_obj: Any = args[0] if args else None
            component = self_obj.__class__.__name__ if self_obj else "Unknown"
            telemetry = getattr(self_obj, "telemetry", None)

            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - start
                METHOD_DURATION.labels(component=component, method=func.__name__).observe(
                    elapsed
                )
                if telemetry:
                    telemetry.log_error(
                        f"Failed: {metric_name}", e, duration_ms=round(elapsed * 1000, 2)
                    )
                raise

            elapsed = time.perf_counter() - start
            METHOD_DURATION.labels(component=component, method=func.__name__).observe(
                elapsed
            )
            if telemetry:
                telemetry.log_debug(metric_name, duration_ms=round(elapsed * 1000, 2))
            return result

        return wrapper

    return decorator


class Telemetry:
    """
    Facade for logs and metrics, tagged with the current correlation id.
    """

    def __init__(self, component_name: str) -> None:
        self.component = component_name
        self.logger: logging.Logger
        self._setup_logger()

    def _setup_logger(self) -> None:
        self.logger = logging.getLogger(f"qotd.{self.component}")

        # Fall back to stdout when the app has not configured logging
        root = logging.getLogger()
        if not root.handlers and not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    # Streamlit may pickle session objects; loggers are not picklable
    def __getstate__(self) -> dict[str, Any]:
        state = self.__dict__.copy()
        state.pop("logger", None)
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._setup_logger()

    @staticmethod
    def start_trace() -> str:
        c_id = uuid.uuid4().hex[:8]
        correlation_id_ctx.set(c_id)
        return c_id

    @staticmethod
    def get_trace_id() -> str:
        return correlation_id_ctx.get()

    def _format(self, event: str, fields: dict[str, Any]) -> str:
        if not fields:
            return f"[{self.get_trace_id()}] {event}"
        return f"[{self.get_trace_id()}] {event} | {fields}"

    def log_debug(self, event: str, **kwargs: Any) -> None:
        self.logger.debug(self._format(event, kwargs))

    def log_info(self, event: str, **kwargs: Any) -> None:
        self.logger.info(self._format(event, kwargs))

    def log_warning(self, event: str, **kwargs: Any) -> None:
        self.logger.warning(self._format(event, kwargs))

    def log_error(self, event: str, error: Exception, **kwargs: Any) -> None:
        self.logger.error(
            self._format(f"{event} | Error: {error}", kwargs), exc_info=error
        )

    @staticmethod
    def record_submission(category_name: str) -> None:
        ANSWERS_SUBMITTED.labels(category=category_name).inc()
