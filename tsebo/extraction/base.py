from abc import ABC, abstractmethod

from tsebo.models import ParsedDocument


class Extractor(ABC):
    """
    Anything that turns an uploaded CV into a ParsedDocument: the local
    heuristics or a hosted parsing service.
    """

    name: str = "extractor"

    @abstractmethod
    def parse(self, content: bytes, filename: str) -> ParsedDocument:
        raise NotImplementedError
