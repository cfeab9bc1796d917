"""Structure validator - does a project look like a containerized project."""

from pathlib import Path
from typing import Optional, Union

from loguru import logger

from ..config import EngineSettings
from ..models import ManifestSet
from .locator import locate_manifests


def validate_structure(manifests: ManifestSet) -> bool:
    """Return False only when there is no Dockerfile anywhere and no root compose file.

    A lone compose file is valid: its services may reference pre-built images.
    """
    logger.info(f"docker-compose file found: {manifests.has_compose}")
    logger.info(f"Found {len(manifests.subdirectories)} folders in the extracted directory.")

    with_dockerfile = {path.parent for path in manifests.subdirectory_dockerfiles}
    for folder in manifests.subdirectories:
        if folder in with_dockerfile:
            logger.info(f"Dockerfile found in: {folder}")
        else:
            logger.warning(f"No Dockerfile found in: {folder}")

    if manifests.root_dockerfile is not None:
        logger.info(f"Dockerfile found in root: {manifests.root_dockerfile}")
    else:
        logger.warning(f"No Dockerfile found in root: {manifests.root}")

    if not manifests.has_compose and not manifests.has_dockerfiles:
        logger.error("Invalid structure: No Dockerfile or docker-compose file found.")
        return False

    logger.info("Project structure validated successfully.")
    return True


def validate_project_structure(root: Union[str, Path], settings: Optional[EngineSettings] = None) -> bool:
    """Locate manifests under ``root`` and validate them."""
    return validate_structure(locate_manifests(root, settings))
