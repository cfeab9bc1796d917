"""Compose advisor - reliability and resource suggestions for compose services."""

import re
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from loguru import logger

from dockle_engine.errors import IOUnavailable, ParseError

_BOOL_TAG = "tag:yaml.org,2002:bool"


class ComposeLoader(yaml.SafeLoader):
    """SafeLoader that only reads ``true``/``false`` as booleans.

    Under YAML 1.1 an unquoted service named ``on``, ``yes`` or ``no`` would
    become a boolean key.
    """


ComposeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ComposeLoader.add_implicit_resolver(
    _BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")
)


def load_compose(compose_path: Union[str, Path]) -> Any:
    """Parse the first YAML document of a compose file.

    Later documents in a multi-document stream are ignored.

    Raises:
        IOUnavailable: if the file cannot be read
        ParseError: if the content is not valid YAML
    """
    compose_path = Path(compose_path)
    try:
        with open(compose_path, "r", encoding="utf-8-sig") as f:
            return next(iter(yaml.load_all(f, Loader=ComposeLoader)), None)
    except yaml.YAMLError as e:
        raise ParseError(compose_path, f"invalid YAML: {e}") from e
    except UnicodeDecodeError as e:
        raise ParseError(compose_path, f"not UTF-8 text: {e}") from e
    except OSError as e:
        raise IOUnavailable(compose_path, f"cannot read compose file: {e.strerror or e}") from e


def suggest_improvements(document: Any, source: Optional[Union[str, Path]] = None) -> List[str]:
    """Suggest missing resource limits and healthchecks for each service.

    Services are visited in declaration order; each yields zero, one or two
    suggestions. A missing or non-mapping ``services`` entry yields nothing,
    and a service whose configuration is not a mapping counts as having no
    keys at all.

    Raises:
        ParseError: if the document root is not a mapping
    """
    if document is None:
        return []
    if not isinstance(document, dict):
        raise ParseError(source, f"compose document root must be a mapping, got {type(document).__name__}")

    services = document.get("services")
    if not isinstance(services, dict):
        if services is not None:
            logger.warning(f"'services' is not a mapping in {source or 'compose document'}; nothing to inspect")
        return []

    suggestions = []
    for service_name, service_config in services.items():
        config = service_config if isinstance(service_config, dict) else {}

        if "deploy" not in config:
            suggestions.append(
                f"⚠️ Service '{service_name}' is missing resource limits. Consider adding 'deploy.resources.limits'."
            )
        if "healthcheck" not in config:
            suggestions.append(f"⚠️ Service '{service_name}' is missing a healthcheck. Add one to improve reliability.")

    return suggestions


def advise_compose_file(compose_path: Union[str, Path]) -> List[str]:
    """Suggest improvements for the compose file at ``compose_path``.

    A missing file is not an error and yields an empty list.
    """
    compose_path = Path(compose_path)
    if not compose_path.is_file():
        logger.warning(f"No compose file at {compose_path}")
        return []

    suggestions = suggest_improvements(load_compose(compose_path), source=compose_path)
    logger.info(f"{len(suggestions)} compose suggestions for {compose_path}")
    return suggestions
