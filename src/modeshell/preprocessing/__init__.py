"""
Input preprocessing for modeshell.

Preprocessors rewrite an input line before it reaches the command tree.
"""

from .pipeline import Preprocessor, PreprocessorPipeline
from .variables import VariablesEngine, ScanState, is_name_char

__all__ = [
    "Preprocessor",
    "PreprocessorPipeline",
    "VariablesEngine",
    "ScanState",
    "is_name_char",
]
