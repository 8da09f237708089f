"""
Exception classes for tsebo.

Only the document decoder, the hosted parser and the fallback selection
raise; the text extractor and the scorer degrade to defaults instead.
"""
from typing import Any, Dict, Optional


class TseboError(Exception):
    """Base exception for tsebo"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/output"""
        result = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class DecodeError(TseboError):
    """Raised when a document cannot be turned into text"""

    def __init__(self, message: str, filename: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if filename:
            details["filename"] = filename
        kwargs.setdefault("error_code", "DECODE_ERROR")
        super().__init__(message, details=details, **kwargs)


class UnsupportedDocumentError(DecodeError):
    """Raised for file types other than PDF and DOCX"""

    def __init__(self, message: str = "Invalid file type. Please upload a PDF or DOCX file.", **kwargs):
        kwargs.setdefault("error_code", "UNSUPPORTED_DOCUMENT")
        super().__init__(message, **kwargs)


class DocumentTooLargeError(DecodeError):
    """Raised when an upload exceeds the configured size limit"""

    def __init__(self, size: int, limit: int, **kwargs):
        details = kwargs.pop("details", None) or {}
        details.update({"size": size, "limit": limit})
        kwargs.setdefault("error_code", "DOCUMENT_TOO_LARGE")
        super().__init__(
            f"File size exceeds {limit // (1024 * 1024)}MB limit.",
            details=details,
            **kwargs,
        )


class LowConfidenceExtraction(TseboError):
    """
    Advisory: an extraction finished but found too little.

    Raised inside the fallback selection so the next extractor gets a chance;
    callers of ``extract`` never see it.
    """

    def __init__(self, confidence: float, threshold: float, source: Optional[str] = None, **kwargs):
        self.confidence = confidence
        self.threshold = threshold
        details = kwargs.pop("details", None) or {}
        details.update({"confidence": round(confidence, 4), "threshold": threshold})
        if source:
            details["source"] = source
        super().__init__(
            f"Low confidence ({confidence:.0%} < {threshold:.0%}), using fallback",
            error_code="LOW_CONFIDENCE",
            details=details,
            **kwargs,
        )


class ParserServiceError(TseboError):
    """Raised when the hosted CV parsing service fails"""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, error_code="PARSER_SERVICE_ERROR", details=details, **kwargs)


class ExtractionFailed(TseboError):
    """Raised when every configured extractor failed"""

    def __init__(self, message: str = "Failed to parse CV with every configured parser", **kwargs):
        kwargs.setdefault("error_code", "EXTRACTION_FAILED")
        super().__init__(message, **kwargs)


class ConfigurationError(TseboError):
    """Raised when configuration is invalid or missing"""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, error_code="CONFIGURATION_ERROR", details=details, **kwargs)
