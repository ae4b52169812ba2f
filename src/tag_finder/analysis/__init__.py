"""Class extraction and usage analysis package."""

from .css_parser import (
    CSS_CLASS_PATTERN,
    deduplicate_classes,
    extract_classes,
    extract_file_classes,
    is_valid_class_name,
)
from .detector import UsageDetector, analyze_directory
from .dynamic_patterns import (
    detect_dynamic_patterns,
    find_pattern_usage,
    pattern_key,
    pattern_used_in_files,
)
from .scanner import IndexedFile, UsageScanner, contains_word, find_word, index_files
from .text_processor import (
    PatternCompileError,
    TextMatch,
    TextProcessor,
    find_exact_words,
    is_ignored_line,
    split_lines,
    word_tokens,
)

__all__ = [
    "CSS_CLASS_PATTERN",
    "IndexedFile",
    "PatternCompileError",
    "TextMatch",
    "TextProcessor",
    "UsageDetector",
    "UsageScanner",
    "analyze_directory",
    "contains_word",
    "deduplicate_classes",
    "detect_dynamic_patterns",
    "extract_classes",
    "extract_file_classes",
    "find_exact_words",
    "find_pattern_usage",
    "find_word",
    "index_files",
    "is_ignored_line",
    "is_valid_class_name",
    "pattern_key",
    "pattern_used_in_files",
    "split_lines",
    "word_tokens",
]
