"""Document scanner — enumerates markdown sources and maps output paths."""

from mdsite.scanner.models import ConvertedDocument, SourceDocument
from mdsite.scanner.scanner import DocumentScanner, extract_title, output_path_for

__all__ = [
    "ConvertedDocument",
    "DocumentScanner",
    "SourceDocument",
    "extract_title",
    "output_path_for",
]
