"""Dockerfile smell detector.

Every rule runs against the raw line sequence of one Dockerfile, in the fixed
order returned by ``default_rules``. Continuation lines are not joined, so a
``RUN`` split with a trailing backslash counts as several lines.

In strict mode (the default) the FROM-tag, ``COPY . /app``, ``ADD`` and
``USER root`` checks match untrimmed lines while the RUN-count, HEALTHCHECK
and FROM-count checks trim first. ``EngineSettings.normalize_whitespace``
trims before every check instead.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from loguru import logger

from dockle_engine.config import EngineSettings
from dockle_engine.errors import IOUnavailable
from dockle_engine.manifests.locator import find_file
from dockle_engine.models import Finding, Severity
from dockle_engine.rules.base import DockerfileContext, SmellRule

CLEAN_FINDING = Finding(Severity.OK, "No Docker smells detected. Good job!", rule_id="clean")


class LatestTagRule(SmellRule):
    rule_id = "latest-tag"

    def check(self, context: DockerfileContext) -> Optional[Finding]:
        if any(context.starts_with(line, "FROM") and ":latest" in line for line in context.lines):
            return Finding(Severity.ERROR, "Avoid using 'latest' tag in FROM instruction.", self.rule_id)
        return None


class RunLayerRule(SmellRule):
    """Too many RUN instructions, each of which adds an image layer."""

    rule_id = "too-many-run"

    def __init__(self, max_run_instructions: int = 3):
        self.max_run_instructions = max_run_instructions

    def check(self, context: DockerfileContext) -> Optional[Finding]:
        run_count = context.count_starts_with("RUN", trimmed=True)
        if run_count > self.max_run_instructions:
            return Finding(
                Severity.WARNING,
                f"Too many RUN commands ({run_count}). Consider combining them to reduce layers.",
                self.rule_id,
            )
        return None


class BroadCopyRule(SmellRule):
    rule_id = "broad-copy"

    def check(self, context: DockerfileContext) -> Optional[Finding]:
        if context.any_starts_with("COPY . /app"):
            return Finding(Severity.WARNING, "Avoid 'COPY . /app'. Use a more selective COPY statement.", self.rule_id)
        return None


class AddInsteadOfCopyRule(SmellRule):
    """ADD used where COPY would do.

    Any ``tar.gz`` mention anywhere in the file exempts every ADD line.
    """

    rule_id = "add-instead-of-copy"

    def check(self, context: DockerfileContext) -> Optional[Finding]:
        if context.any_starts_with("ADD") and not context.any_contains("tar.gz"):
            return Finding(Severity.WARNING, "Prefer 'COPY' instead of 'ADD' unless extracting archives.", self.rule_id)
        return None


class RootUserRule(SmellRule):
    rule_id = "root-user"

    def check(self, context: DockerfileContext) -> Optional[Finding]:
        if context.any_starts_with("USER root"):
            return Finding(
                Severity.ERROR, "Avoid using 'USER root'. Use a non-root user for better security.", self.rule_id
            )
        return None


class MissingHealthcheckRule(SmellRule):
    rule_id = "missing-healthcheck"

    def check(self, context: DockerfileContext) -> Optional[Finding]:
        if not context.any_starts_with("HEALTHCHECK", trimmed=True):
            return Finding(
                Severity.WARNING,
                "Missing 'HEALTHCHECK' instruction. Consider adding a health check to improve container monitoring.",
                self.rule_id,
            )
        return None


class SingleStageRule(SmellRule):
    """Exactly one FROM line; zero or several produce nothing."""

    rule_id = "single-stage"

    def check(self, context: DockerfileContext) -> Optional[Finding]:
        if context.count_starts_with("FROM", trimmed=True) == 1:
            return Finding(Severity.WARNING, "Consider using multi-stage builds to reduce the final image size.", self.rule_id)
        return None


class MissingDockerignoreRule(SmellRule):
    rule_id = "missing-dockerignore"

    def check(self, context: DockerfileContext) -> Optional[Finding]:
        if not context.dockerignore_present:
            return Finding(Severity.WARNING, "Missing '.dockerignore' file. This can lead to large image size.", self.rule_id)
        return None


def default_rules(settings: Optional[EngineSettings] = None) -> List[SmellRule]:
    """The smell catalogue, in reporting order."""
    settings = settings or EngineSettings()
    return [
        LatestTagRule(),
        RunLayerRule(settings.max_run_instructions),
        BroadCopyRule(),
        AddInsteadOfCopyRule(),
        RootUserRule(),
        MissingHealthcheckRule(),
        SingleStageRule(),
        MissingDockerignoreRule(),
    ]


def detect_smells(
    lines: Sequence[str],
    dockerignore_present: bool = True,
    settings: Optional[EngineSettings] = None,
    rules: Optional[Sequence[SmellRule]] = None,
) -> List[Finding]:
    """Run every rule over ``lines``.

    Returns:
        The findings in rule order, or ``[CLEAN_FINDING]`` when no rule fired.
        Never empty.
    """
    settings = settings or EngineSettings()
    context = DockerfileContext(
        lines=list(lines),
        dockerignore_present=dockerignore_present,
        normalize_whitespace=settings.normalize_whitespace,
    )

    findings = []
    for rule in rules if rules is not None else default_rules(settings):
        finding = rule.check(context)
        if finding is not None:
            findings.append(finding)

    if not findings:
        findings.append(CLEAN_FINDING)
    return findings


def read_dockerfile_lines(dockerfile_path: Path) -> List[str]:
    """Read a Dockerfile as a list of lines without line terminators."""
    try:
        text = dockerfile_path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as e:
        raise IOUnavailable(dockerfile_path, f"cannot read Dockerfile: {e.strerror or e}") from e
    return text.splitlines()


def analyze_dockerfile(dockerfile_path: Union[str, Path], settings: Optional[EngineSettings] = None) -> List[Finding]:
    """Read one Dockerfile from disk and detect its smells.

    Raises:
        IOUnavailable: if the file or its directory cannot be read
    """
    settings = settings or EngineSettings()
    dockerfile_path = Path(dockerfile_path)
    lines = read_dockerfile_lines(dockerfile_path)
    dockerignore = find_file(dockerfile_path.parent, [settings.dockerignore_name])

    findings = detect_smells(lines, dockerignore_present=dockerignore is not None, settings=settings)
    logger.debug(f"{dockerfile_path}: {len(findings)} findings")
    return findings
