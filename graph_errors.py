# graph_errors.py

"""Exceptions raised while loading and analysing a relationship graph."""


class GraphPipelineError(Exception):
    """Base class for every error the pipeline reports and exits on."""


class SourceUnavailable(GraphPipelineError):
    def __init__(self, source, reason=None):
        self.source = source
        self.reason = reason
        msg = f"Cannot read edge source '{source}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class MalformedRecord(GraphPipelineError):
    """A record whose fields are not two non-negative integer identifiers."""

    def __init__(self, line, value, reason="not a non-negative integer"):
        self.line = line
        self.value = value
        self.reason = reason
        where = f" at line {line}" if line is not None else ""
        super().__init__(f"Malformed record{where}: {value!r} ({reason})")


class InsufficientGraphSize(GraphPipelineError):
    def __init__(self, node_count, required=2):
        self.node_count = node_count
        self.required = required
        super().__init__(
            f"Degree centrality needs at least {required} nodes, graph has {node_count}"
        )


class EmptyGraph(GraphPipelineError):
    def __init__(self, operation):
        self.operation = operation
        super().__init__(f"{operation}: graph has no nodes")


class GraphFrozenError(GraphPipelineError):
    def __init__(self, operation):
        self.operation = operation
        super().__init__(f"{operation}: graph is frozen after ingestion")
