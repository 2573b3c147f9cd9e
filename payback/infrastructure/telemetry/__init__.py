from opentelemetry import trace as otel_trace, metrics as otel_metrics
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
import os
from payback.common.config import Config

METRICS_EXPORT_INTERVAL_MS = 15000


def setup_opentelemetry(app):
    '''Installs SDK providers with OTLP/gRPC exporters and instruments the app. Call once per process'''
    resource = Resource.create({
        "service.name": Config.OTEL_SERVICE_NAME,
        "service.version": Config.GIT_COMMIT,
        "deployment.environment": Config.MODE,
        "process.pid": os.getpid(),
        "service.instance.id": f"worker-{os.getpid()}",
        })

    span_exporter = OTLPSpanExporter(endpoint=Config.OTEL_GRPC_ENDPOINT, insecure=True)
    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(span_exporter))
    otel_trace.set_tracer_provider(tracer_provider)

    reader = PeriodicExportingMetricReader(
        exporter=OTLPMetricExporter(endpoint=Config.OTEL_GRPC_ENDPOINT, insecure=True),
        export_interval_millis=METRICS_EXPORT_INTERVAL_MS,
    )
    otel_metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[reader]))

    #health probes would drown the useful spans
    FastAPIInstrumentor.instrument_app(app, excluded_urls="health", exclude_spans=['receive', 'send'])
    LoggingInstrumentor().instrument(set_logging_format=False)
