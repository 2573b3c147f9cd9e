from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
import payback.infrastructure.interfaces as iabc
from payback.common.config import Config
import contextlib, typing as t, functools, inspect

F = t.TypeVar("F", bound=t.Callable[..., t.Any])

class OTELTracer(iabc.ITracer):
    '''Spans go to whatever provider is installed globally. Without the SDK (OTEL_ENABLED=0) they are no-ops'''
    def __init__(self, tracer_name: str):
        self._tracer = trace.get_tracer(tracer_name)


    @staticmethod
    @contextlib.contextmanager
    def start_span(name: str, attributes: dict[str, t.Any] | None = None):
        tracer = trace.get_tracer(Config.APP_NAME)
        with tracer.start_as_current_span(name, attributes=attributes) as span:
            yield span


    @staticmethod
    def get_trace_id(span) -> int:
        return span.get_span_context().trace_id


    @staticmethod
    def _mark_failed(span, e: Exception):
        #Only the exception type goes into the status, messages may carry user input
        span.record_exception(e)
        span.set_status(Status(StatusCode.ERROR, type(e).__name__))


    @staticmethod
    def traced(func: F) -> F:
        tracer = trace.get_tracer(func.__module__)

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                with tracer.start_as_current_span(func.__qualname__) as span:
                    try:
                        return await func(*args, **kwargs)
                    except Exception as e:
                        OTELTracer._mark_failed(span, e)
                        raise
            return async_wrapper

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            with tracer.start_as_current_span(func.__qualname__) as span:
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    OTELTracer._mark_failed(span, e)
                    raise
        return sync_wrapper
