"""Dockerfile remediator - rewrites a Dockerfile into a fixed, smell-free shape.

The rewrite reduces the file to at most one line per slot, always in this
order::

    FROM, USER, RUN, WORKDIR, COPY, EXPOSE, HEALTHCHECK, CMD

WORKDIR, COPY and HEALTHCHECK are fixed and always emitted; the other slots
come from the original file and are omitted when it had nothing for them.
Anything else is dropped, so the ``.bak`` copy written beforehand is the only
way back to the original.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from loguru import logger

from dockle_engine.config import EngineSettings
from dockle_engine.errors import IOUnavailable
from dockle_engine.models import RemediationOutcome
from dockle_engine.rules.dockerfile import read_dockerfile_lines

WORKDIR_LINE = "WORKDIR /app"
COPY_LINE = "COPY . ."
HEALTHCHECK_LINE = "HEALTHCHECK CMD curl --fail http://localhost || exit 1"

# Superseded by the fixed lines above, so not counted as dropped
_FIXED_SLOT_KEYWORDS = ("WORKDIR", "COPY", "HEALTHCHECK")


@dataclass
class RewritePlan:
    """Slots collected from the original lines; the last contributor wins except for RUN."""

    from_line: Optional[str] = None
    user_line: Optional[str] = None
    run_commands: List[str] = field(default_factory=list)
    expose_line: Optional[str] = None
    cmd_line: Optional[str] = None
    dropped: List[str] = field(default_factory=list)

    def render(self) -> List[str]:
        lines = []
        if self.from_line is not None:
            lines.append(self.from_line)
        if self.user_line is not None:
            lines.append(self.user_line)
        if self.run_commands:
            lines.append("RUN " + " && ".join(self.run_commands))
        lines.append(WORKDIR_LINE)
        lines.append(COPY_LINE)
        if self.expose_line is not None:
            lines.append(self.expose_line)
        lines.append(HEALTHCHECK_LINE)
        if self.cmd_line is not None:
            lines.append(self.cmd_line)
        return lines


def plan_rewrite(lines: Sequence[str], settings: Optional[EngineSettings] = None) -> RewritePlan:
    """Sort the original lines into rewrite slots.

    Keyword matching follows the smell detector: RUN is matched on the
    trimmed line, the other keywords on the raw line unless
    ``normalize_whitespace`` is set.
    """
    settings = settings or EngineSettings()
    normalize = settings.normalize_whitespace
    plan = RewritePlan()

    for raw in lines:
        stripped = raw.strip()
        line = stripped if normalize else raw

        if line.startswith("FROM"):
            plan.from_line = line.replace(":latest", ":stable")
            if ":latest" in line:
                logger.info("Updated FROM instruction to avoid 'latest' tag.")
        elif line.startswith("USER root"):
            plan.user_line = f"USER {settings.non_root_user}"
            logger.info("Replaced 'USER root' with a non-root user.")
        elif line.startswith("USER"):
            plan.user_line = line
        elif stripped.startswith("RUN"):
            command = stripped[len("RUN"):].strip()
            if command:
                plan.run_commands.append(command)
        elif line.startswith("EXPOSE"):
            plan.expose_line = line
        elif line.startswith("CMD"):
            plan.cmd_line = line
        elif stripped.startswith(_FIXED_SLOT_KEYWORDS):
            continue
        elif stripped and not stripped.startswith("#"):
            logger.debug(f"Dropping line: {stripped}")
            plan.dropped.append(raw)

    return plan


def rewrite_dockerfile_text(text: str, settings: Optional[EngineSettings] = None) -> str:
    """Return the remediated form of a Dockerfile's content."""
    return "\n".join(plan_rewrite(text.splitlines(), settings).render()) + "\n"


def remediate_dockerfile(
    dockerfile_path: Union[str, Path], settings: Optional[EngineSettings] = None
) -> RemediationOutcome:
    """Back up ``dockerfile_path`` to ``<path>.bak`` and rewrite it in place.

    An existing backup is overwritten. If the backup cannot be written the
    live file is left untouched.

    Raises:
        IOUnavailable: if the backup, the read or the rewrite fails
    """
    settings = settings or EngineSettings()
    dockerfile_path = Path(dockerfile_path)
    backup_path = dockerfile_path.with_name(dockerfile_path.name + settings.backup_suffix)

    try:
        shutil.copyfile(dockerfile_path, backup_path)
    except OSError as e:
        raise IOUnavailable(dockerfile_path, f"cannot create backup {backup_path}: {e.strerror or e}") from e
    logger.info(f"Backup created: {backup_path}")

    plan = plan_rewrite(read_dockerfile_lines(dockerfile_path), settings)
    if plan.dropped:
        logger.warning(f"Dropped {len(plan.dropped)} unrecognized lines from {dockerfile_path}")

    try:
        dockerfile_path.write_text("\n".join(plan.render()) + "\n", encoding="utf-8")
    except OSError as e:
        raise IOUnavailable(
            dockerfile_path, f"rewrite failed, original preserved at {backup_path}: {e.strerror or e}"
        ) from e

    logger.info(f"Dockerfile optimization complete: {dockerfile_path}")
    return RemediationOutcome(
        path=str(dockerfile_path),
        ok=True,
        backup_path=str(backup_path),
        dropped_lines=len(plan.dropped),
    )
