from tsebo.extraction.base import Extractor
from tsebo.extraction.heuristic import LocalExtractor, TextFieldExtractor, extract
from tsebo.extraction.affinda import AffindaExtractor, map_affinda_response
from tsebo.extraction.confidence import score, validate_parsed
from tsebo.extraction.selection import choose_result, parse_with_fallback

__all__ = [
    "Extractor",
    "LocalExtractor",
    "TextFieldExtractor",
    "extract",
    "AffindaExtractor",
    "map_affinda_response",
    "score",
    "validate_parsed",
    "choose_result",
    "parse_with_fallback",
]
