import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace import SpanProcessor
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from app.core.config import Settings
from app.core.telemetry import Telemetry
from app.db.repositories import MongoTextRepository
from app.domains.texts.services import TextService
from app.main import create_app
from tests.fakes import FakeMongoClient


class CountingSpanProcessor(SpanProcessor):
    """Counts span starts and ends to check that every span is closed once"""

    def __init__(self) -> None:
        self.started = 0
        self.ended = 0

    def on_start(self, span, parent_context=None) -> None:
        self.started += 1

    def on_end(self, span) -> None:
        self.ended += 1


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def span_counter() -> CountingSpanProcessor:
    return CountingSpanProcessor()


@pytest.fixture
def telemetry(span_exporter, span_counter):
    with Telemetry("persistence-api-test", [SimpleSpanProcessor(span_exporter), span_counter]) as handle:
        yield handle


@pytest.fixture
def mongo_client() -> FakeMongoClient:
    return FakeMongoClient()


@pytest.fixture
def repository(mongo_client) -> MongoTextRepository:
    return MongoTextRepository(mongo_client, "testdb", "texts")


@pytest.fixture
def collection(mongo_client, repository):
    return mongo_client["testdb"]["texts"]


@pytest.fixture
def text_service(repository, telemetry) -> TextService:
    return TextService(repository, telemetry)


@pytest.fixture
def client(repository, telemetry) -> TestClient:
    settings = Settings(otlp_traces_endpoint="")
    app = create_app(settings=settings, repository=repository, telemetry=telemetry)
    return TestClient(app)
