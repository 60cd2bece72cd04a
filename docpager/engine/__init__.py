"""Pagination engine: size oracles, paginator, page composer and pipeline."""

from .composer import PageComposer
from .paginator import Paginator
from .pipeline import PaginationPipeline, PaginationResult, PaginationSession
from .size_oracle import BlockStyle, SizeOracle, StaticSizeOracle, TextMetricsSizeOracle
from .text_metrics import TextLayout, TextMetricsEngine

__all__ = [
    "BlockStyle",
    "PageComposer",
    "PaginationPipeline",
    "PaginationResult",
    "PaginationSession",
    "Paginator",
    "SizeOracle",
    "StaticSizeOracle",
    "TextLayout",
    "TextMetricsEngine",
    "TextMetricsSizeOracle",
]
