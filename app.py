import logging
import os

import streamlit as st

# --- OTel & Observability Imports ---
from opentelemetry import trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

# --- Prometheus Import ---
from prometheus_client import start_http_server

# --- Application Imports ---
from src.config import AppConfig
from src.qotd.adapters.db_manager import DatabaseManager
from src.qotd.adapters.sqlite_store import SQLiteKeyValueStore
from src.qotd.adapters.tracker_repository import KeyValueTrackerRepository
from src.qotd.application.tracker import DailyStateTracker
from src.qotd.domain.catalog import QuestionCatalog
from src.qotd.presentation.state_provider import StreamlitStateProvider
from src.qotd.presentation.viewmodel import QuestionViewModel, Screen
from src.qotd.presentation.views import category_view, components, question_view

logger = logging.getLogger(__name__)


def configure_observability() -> None:
    """
    Sends traces and logs over OTLP when OTEL_EXPORTER_OTLP_* is set,
    and exposes Prometheus metrics on AppConfig.METRICS_PORT.
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    headers = os.getenv("OTEL_EXPORTER_OTLP_HEADERS")

    if endpoint and headers:
        resource = Resource.create({"service.name": AppConfig.SERVICE_NAME})

        trace_provider = TracerProvider(resource=resource)
        trace_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, headers=headers))
        )
        trace.set_tracer_provider(trace_provider)

        logger_provider = LoggerProvider(resource=resource)
        logger_provider.add_log_record_processor(
            BatchLogRecordProcessor(OTLPLogExporter(endpoint=endpoint, headers=headers))
        )
        set_logger_provider(logger_provider)
        logging.getLogger().addHandler(
            LoggingHandler(level=logging.INFO, logger_provider=logger_provider)
        )
    else:
        logger.warning("OTEL env vars not set; telemetry stays local.")

    try:
        start_http_server(AppConfig.METRICS_PORT)
        logger.info("Prometheus metrics on port %s", AppConfig.METRICS_PORT)
    except OSError:
        # Streamlit reruns the script; the server from the first run is still up
        logger.info("Metrics port %s already in use, skipping.", AppConfig.METRICS_PORT)


# --- Bootstrap (once per session) ---
if "observability_configured" not in st.session_state:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    configure_observability()
    st.session_state.observability_configured = True


# --- Composition Root ---
@st.cache_resource
def get_repository() -> KeyValueTrackerRepository:
    db_manager = DatabaseManager(AppConfig.get_db_path())
    return KeyValueTrackerRepository(SQLiteKeyValueStore(db_manager))


@st.cache_resource
def get_catalog() -> QuestionCatalog:
    return QuestionCatalog()


def build_tracker() -> DailyStateTracker:
    return DailyStateTracker(get_catalog(), get_repository())


def main() -> None:
    st.set_page_config(page_title=AppConfig.APP_TITLE, page_icon="💬", layout="centered")
    components.apply_styles()

    vm = QuestionViewModel(build_tracker, StreamlitStateProvider())

    screen = vm.current_screen
    if screen == Screen.CATEGORY_SELECTION:
        category_view.render(vm)
    elif screen == Screen.QUESTION_ACTIVE:
        question_view.render_active(vm)
    elif screen == Screen.ANSWERED:
        question_view.render_answered(vm)


if __name__ == "__main__":
    main()
