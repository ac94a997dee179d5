from .dependencies import DependencyPartition, classify
from .gomod import GoModParser
from .locator import detect_project, find_manifest

__all__ = [
    "DependencyPartition",
    "GoModParser",
    "classify",
    "detect_project",
    "find_manifest",
]
