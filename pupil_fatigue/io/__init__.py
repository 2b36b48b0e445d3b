"""I/O, store and pipeline utilities."""

from .io import read_report, read_tsv, samples_to_frame, write_samples_tsv, write_tsv
from .store import (
    AnonymousIdentity,
    DocumentStore,
    InMemoryDocumentStore,
    JsonFileDocumentStore,
    RecordCache,
    StoreClient,
)
from .external import (
    ServiceResponse,
    TTSRequest,
    analysis_request_for,
    build_analysis_request,
    build_tts_request,
    parse_analysis_response,
)
from .observers import ConsoleReporter, MetricsLogger, PipelineObserver
from .pipeline import FatiguePipeline

__all__ = [
    "read_report",
    "read_tsv",
    "samples_to_frame",
    "write_samples_tsv",
    "write_tsv",
    "AnonymousIdentity",
    "DocumentStore",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "RecordCache",
    "StoreClient",
    "ServiceResponse",
    "TTSRequest",
    "analysis_request_for",
    "build_analysis_request",
    "build_tts_request",
    "parse_analysis_response",
    "ConsoleReporter",
    "MetricsLogger",
    "PipelineObserver",
    "FatiguePipeline",
]
