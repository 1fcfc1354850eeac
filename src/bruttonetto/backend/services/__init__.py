"""Service-layer helpers for the brutto-netto backend."""

from .batch import calculate_batch
from .normalizer import build_base_input
from .request_parser import extract_gross_wages, parse_batch_payload
from .response_builder import build_batch_response, shape_results

__all__ = [
    "build_base_input",
    "build_batch_response",
    "calculate_batch",
    "extract_gross_wages",
    "parse_batch_payload",
    "shape_results",
]
