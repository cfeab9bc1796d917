from .base import DockerfileContext, SmellRule
from .dockerfile import CLEAN_FINDING, analyze_dockerfile, default_rules, detect_smells

__all__ = [
    "CLEAN_FINDING",
    "DockerfileContext",
    "SmellRule",
    "analyze_dockerfile",
    "default_rules",
    "detect_smells",
]
