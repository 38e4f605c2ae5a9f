"""Output formatting module."""

from .json_formatter import print_json
from .console import (
    print_type,
    print_candidates,
    print_references,
    print_metrics,
    print_analysis,
    metrics_to_dict,
    analysis_to_dict,
)
from .tree import print_closure_tree, closure_tree_to_dict
from .export import export_analysis

__all__ = [
    "print_json",
    "print_type",
    "print_candidates",
    "print_references",
    "print_metrics",
    "print_analysis",
    "metrics_to_dict",
    "analysis_to_dict",
    "print_closure_tree",
    "closure_tree_to_dict",
    "export_analysis",
]
