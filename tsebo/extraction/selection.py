# tsebo/extraction/selection.py
"""
Pick between several extraction attempts of the same CV.

Extractors run in the order given. The first result whose confidence reaches
the threshold is used; otherwise the best result seen is returned together
with why nothing better was available.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from tsebo.exceptions import ExtractionFailed, LowConfidenceExtraction, TseboError
from tsebo.extraction.base import Extractor
from tsebo.extraction.confidence import score
from tsebo.models import ExtractionResult

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.5


def choose_result(results: Sequence[ExtractionResult], threshold: float = DEFAULT_THRESHOLD) -> Optional[ExtractionResult]:
    """First result at or above the threshold, else the highest-scoring one (earliest on ties)."""
    if not results:
        return None
    for result in results:
        if result.confidence >= threshold:
            return result
    return max(results, key=lambda r: r.confidence)


def parse_with_fallback(
    content: bytes,
    filename: str,
    extractors: Sequence[Extractor],
    threshold: float = DEFAULT_THRESHOLD,
) -> ExtractionResult:
    results: List[ExtractionResult] = []
    reasons: List[str] = []

    for extractor in extractors:
        try:
            data = extractor.parse(content, filename)
            confidence = score(data)
            result = ExtractionResult(data=data, source=extractor.name, confidence=confidence)
            results.append(result)
            if confidence < threshold:
                raise LowConfidenceExtraction(confidence, threshold, source=extractor.name)
        except LowConfidenceExtraction as e:
            logger.warning(f"{extractor.name}: {e.message}")
            reasons.append(f"{extractor.name}: {e.message}")
            continue
        except TseboError as e:
            logger.warning(f"{extractor.name} parser failed: {e.message}")
            reasons.append(f"{extractor.name}: {e.message}")
            continue

        logger.info(f"Using {extractor.name} result (confidence: {confidence:.0%})")
        break

    chosen = choose_result(results, threshold)
    if chosen is None:
        logger.error(f"Every parser failed for {filename}")
        raise ExtractionFailed(details={"filename": filename, "reasons": reasons})

    if reasons:
        chosen = chosen.model_copy(update={"fallback_reason": "; ".join(reasons)})
    return chosen
