from abc import ABC, abstractmethod
import typing as t


F = t.TypeVar("F", bound=t.Callable[..., t.Any])

class ITracer(ABC):
    @staticmethod
    @abstractmethod
    def start_span(name: str, attributes: dict[str, t.Any] | None = None) -> t.ContextManager[t.Any]:
        """Returns span context manager"""

    @staticmethod
    @abstractmethod
    def get_trace_id(span) -> int: ...

    @staticmethod
    @abstractmethod
    def traced(func: F) -> F:
        """Wraps sync or async callables in a span named after the function.
        Exceptions are recorded on the span and re-raised unchanged."""
