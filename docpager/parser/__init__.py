"""Parsers turning document content into block streams."""

from .block_builder import BlockStreamBuilder, chunk_blocks, is_forced_break
from .html_parser import FlowContentParser, node_from_dict, nodes_from_records, parse_flow_content

__all__ = [
    "BlockStreamBuilder",
    "FlowContentParser",
    "chunk_blocks",
    "is_forced_break",
    "node_from_dict",
    "nodes_from_records",
    "parse_flow_content",
]
