"""Index builder — groups converted documents into navigation sections."""

from .builder import IndexBuilder, IndexSection, group_documents, numeric_prefix, sort_key

__all__ = ["IndexBuilder", "IndexSection", "group_documents", "numeric_prefix", "sort_key"]
