from .locator import find_file, locate_manifests, scan_project_tree
from .validator import validate_project_structure, validate_structure

__all__ = [
    "find_file",
    "locate_manifests",
    "scan_project_tree",
    "validate_project_structure",
    "validate_structure",
]
