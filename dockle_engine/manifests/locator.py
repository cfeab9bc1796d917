"""Manifest locator - finds Dockerfiles and the compose file under a project root.

Names are matched exactly against directory listings, so ``dockerfile`` and
``Dockerfile`` are distinct on every host filesystem. Which names count as a
Dockerfile is controlled by ``EngineSettings.dockerfile_names``; the first
configured name present in a directory wins.
"""

import os
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

from loguru import logger

from ..config import EngineSettings
from ..errors import IOUnavailable
from ..models import ManifestSet, ProjectTree


def _list_entries(directory: Path) -> Dict[str, os.DirEntry]:
    with os.scandir(directory) as it:
        return {entry.name: entry for entry in it}


def find_file(directory: Path, names: Sequence[str]) -> Optional[Path]:
    """Return the first regular file in ``directory`` named exactly one of ``names``.

    Args:
        directory: Directory to look in
        names: Candidate file names, in priority order

    Returns:
        Path of the match, or None if there is none

    Raises:
        IOUnavailable: if the directory cannot be listed
    """
    try:
        entries = _list_entries(directory)
    except OSError as e:
        raise IOUnavailable(directory, f"cannot list directory: {e.strerror or e}") from e

    for name in names:
        entry = entries.get(name)
        if entry is not None and entry.is_file():
            return directory / name
    return None


def scan_project_tree(root: Union[str, Path]) -> ProjectTree:
    """Resolve the project root and list its first-level subdirectories."""
    root_path = Path(root).resolve()
    if not root_path.exists():
        raise IOUnavailable(root_path, "project root does not exist")
    if not root_path.is_dir():
        raise IOUnavailable(root_path, "project root is not a directory")

    try:
        entries = _list_entries(root_path)
    except OSError as e:
        raise IOUnavailable(root_path, f"project root is not readable: {e.strerror or e}") from e

    subdirectories = sorted(root_path / name for name, entry in entries.items() if entry.is_dir())
    return ProjectTree(root=root_path, subdirectories=subdirectories)


def locate_manifests(root: Union[str, Path], settings: Optional[EngineSettings] = None) -> ManifestSet:
    """Discover the root compose file, the root Dockerfile and one Dockerfile per subdirectory.

    An unreadable subdirectory is skipped with a warning; only an unavailable
    root is an error.
    """
    settings = settings or EngineSettings()
    tree = scan_project_tree(root)

    manifests = ManifestSet(root=tree.root, subdirectories=list(tree.subdirectories))
    manifests.compose_path = find_file(tree.root, [settings.compose_name])
    manifests.root_dockerfile = find_file(tree.root, settings.dockerfile_names)

    for folder in tree.subdirectories:
        try:
            dockerfile = find_file(folder, settings.dockerfile_names)
        except IOUnavailable as e:
            logger.warning(f"Skipping unreadable folder {folder}: {e.reason}")
            continue
        if dockerfile is not None:
            manifests.subdirectory_dockerfiles.append(dockerfile)

    logger.debug(
        f"Located manifests under {tree.root}: compose={manifests.compose_path}, "
        f"dockerfiles={len(manifests.dockerfile_paths)}"
    )
    return manifests
