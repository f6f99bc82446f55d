"""Parsing of Keep a Changelog documents."""

from .builder import parse_text
from .categories import extract_categories
from .splitter import RawSection, SplitDocument, split_sections

__all__ = ["RawSection", "SplitDocument", "extract_categories", "parse_text", "split_sections"]
