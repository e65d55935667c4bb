"""OpenTelemetry setup: traces and metrics over OTLP/gRPC."""

import os
from fastapi import FastAPI
from opentelemetry import trace, metrics
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.instrumentation.psycopg2 import Psycopg2Instrumentor
from loguru import logger

from app.core.config import get_settings

DEFAULT_SERVICE_NAME = "gestao-api"


def build_resource() -> Resource:
    """Resource attributes shared by traces, metrics and logs."""
    return Resource.create(
        {
            "service.name": os.getenv("OTEL_SERVICE_NAME", DEFAULT_SERVICE_NAME),
            "deployment.environment": get_settings().ENVIRONMENT,
        }
    )


def otlp_insecure() -> bool:
    return os.getenv("OTEL_EXPORTER_OTLP_INSECURE", "false").lower() == "true"


def setup_telemetry(app: FastAPI):
    """
    Export traces and metrics when OTEL_EXPORTER_OTLP_ENDPOINT is set.

    Requests and SQL statements are both instrumented, so each dashboard read
    appears as a child span of its request. Failures are logged, never raised.
    """
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not endpoint:
        logger.warning("No endpoint configured. Telemetry disabled.")
        return
    try:
        resource = build_resource()
        insecure = otlp_insecure()

        tracer_provider = TracerProvider(resource=resource)
        tracer_provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=insecure))
        )
        trace.set_tracer_provider(tracer_provider)

        reader = PeriodicExportingMetricReader(
            OTLPMetricExporter(endpoint=endpoint, insecure=insecure)
        )
        metrics.set_meter_provider(
            MeterProvider(resource=resource, metric_readers=[reader])
        )

        # Lifespan can run several times in one process (tests, reloads)
        if not getattr(setup_telemetry, "_instrumented", False):
            FastAPIInstrumentor.instrument_app(app, excluded_urls="/health")
            SQLAlchemyInstrumentor().instrument(enable_commenter=True)  # type: ignore
            Psycopg2Instrumentor().instrument(  # type: ignore
                enable_commenter=True, skip_dep_check=True
            )
            setup_telemetry._instrumented = True  # type: ignore

        logger.info(f"Traces & Metrics exporting to {endpoint}.")

    except Exception as e:
        logger.error(f"Traces & Metrics Setup Failed: {e}")
