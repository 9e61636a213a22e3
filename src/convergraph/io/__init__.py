"""Input readers and graph serializers."""

from convergraph.io.records import RECORD_FIELDS, read_records, read_reference
from convergraph.io.serializers import (
    OutputFormat,
    to_dot,
    to_graphml,
    write_graph,
    write_graphml,
)

__all__ = [
    "RECORD_FIELDS",
    "read_records",
    "read_reference",
    "OutputFormat",
    "to_dot",
    "to_graphml",
    "write_graph",
    "write_graphml",
]
