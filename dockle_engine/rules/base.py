from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from dockle_engine.models import Finding


@dataclass
class DockerfileContext:
    """
    Raw lines of one Dockerfile plus the facts about its directory the rules need.

    Keyword checks are literal, case-sensitive prefix matches. A check made
    with ``trimmed=True`` strips surrounding whitespace first; with
    ``normalize_whitespace`` set, every check does.
    """

    lines: List[str]
    dockerignore_present: bool = True
    normalize_whitespace: bool = False

    def starts_with(self, line: str, keyword: str, trimmed: bool = False) -> bool:
        if trimmed or self.normalize_whitespace:
            line = line.strip()
        return line.startswith(keyword)

    def any_starts_with(self, keyword: str, trimmed: bool = False) -> bool:
        return any(self.starts_with(line, keyword, trimmed) for line in self.lines)

    def count_starts_with(self, keyword: str, trimmed: bool = False) -> int:
        return sum(1 for line in self.lines if self.starts_with(line, keyword, trimmed))

    def any_contains(self, needle: str) -> bool:
        return any(needle in line for line in self.lines)


class SmellRule(ABC):
    """
    Interface for a single Dockerfile smell check.
    Rules are independent: each sees the whole file and reports at most one finding.
    """

    rule_id: str

    @abstractmethod
    def check(self, context: DockerfileContext) -> Optional[Finding]:
        """
        Inspect the Dockerfile.

        Args:
            context: Lines and directory facts of the Dockerfile under analysis

        Returns:
            A finding if the smell is present, otherwise None
        """
        pass
