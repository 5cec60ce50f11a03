# Observability Package
from observability.trace import ExecutionTrace
from observability.sink import TraceSink, ConsoleTraceSink, JsonTraceSink, MemoryTraceSink
from observability.collector import TraceCollector

__all__ = [
    "ExecutionTrace",
    "TraceSink",
    "ConsoleTraceSink",
    "JsonTraceSink",
    "MemoryTraceSink",
    "TraceCollector",
]
