import asyncio
import logging
from contextlib import contextmanager
from typing import Iterator, Mapping, Optional, Sequence

from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.baggage.propagation import W3CBaggagePropagator
from opentelemetry.context import Context
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.propagators.composite import CompositePropagator
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, SpanKind, Status, StatusCode
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from app.core.config import Settings

logger = logging.getLogger(__name__)

TRACER_NAME = "app.texts"


class Telemetry:
    """Явный дескриптор трассировки.

    Владеет собственным TracerProvider и никогда не регистрирует его глобально:
    каждый компонент, открывающий спаны, получает этот объект по ссылке.
    Закрывается через shutdown() или выход из контекстного менеджера.
    """

    def __init__(self, service_name: str, span_processors: Sequence[SpanProcessor] = ()):
        self.provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
        for processor in span_processors:
            self.provider.add_span_processor(processor)
        self.tracer = self.provider.get_tracer(TRACER_NAME)
        self.propagator = CompositePropagator(
            [TraceContextTextMapPropagator(), W3CBaggagePropagator()]
        )
        self._is_shut_down = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "Telemetry":
        """Создание дескриптора с OTLP/HTTP экспортом по настройкам"""
        processors = []
        if settings.otlp_traces_endpoint:
            exporter = OTLPSpanExporter(endpoint=settings.otlp_traces_endpoint)
            processors.append(BatchSpanProcessor(exporter))
            logger.info(f"Exporting spans to {settings.otlp_traces_endpoint}")
        else:
            logger.info("Span export disabled")
        return cls(settings.service_name, processors)

    def extract(self, headers: Mapping[str, str]) -> Context:
        """Извлечение удалённого контекста из заголовков traceparent/tracestate/baggage"""
        return self.propagator.extract(carrier=headers)

    @contextmanager
    def start_operation(
        self,
        name: str,
        attributes: Optional[dict] = None,
        context: Optional[Context] = None,
        kind: SpanKind = SpanKind.INTERNAL,
    ) -> Iterator[Span]:
        """Открытие дочернего спана для логической операции.

        Родитель берётся из переданного контекста, иначе из активного.
        Спан становится текущим на время операции и закрывается ровно один раз
        на любом пути выхода; ошибки и отмена фиксируются в статусе до закрытия.
        """
        span = self.tracer.start_span(name, context=context, kind=kind, attributes=attributes)
        token = otel_context.attach(trace.set_span_in_context(span, context))
        try:
            yield span
        except asyncio.CancelledError:
            span.add_event("cancelled")
            span.set_status(Status(StatusCode.ERROR, "cancelled"))
            raise
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, f"{type(exc).__name__}: {exc}"))
            raise
        finally:
            otel_context.detach(token)
            span.end()

    def shutdown(self) -> None:
        """Сброс буферов и остановка процессоров спанов"""
        if self._is_shut_down:
            return
        self._is_shut_down = True
        self.provider.shutdown()

    def __enter__(self) -> "Telemetry":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
