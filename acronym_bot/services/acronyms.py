# Static acronym table: loading at start-up and exact-match lookup

import logging
from pathlib import Path
from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple, Union

import yaml

logger = logging.getLogger(__name__)

NOT_FOUND_TEMPLATE = "No definition found for {key}"

AcronymTable = Mapping[str, Sequence[str]]


def load_acronyms(path: Union[str, Path]) -> Mapping[str, Tuple[str, ...]]:
    """Loads the acronym table from a YAML (or JSON) file.

    The file holds a mapping of acronym to either one definition string or a
    list of them. Keys must be strings; quote YAML keys such as "NO" or "ON"
    that would otherwise load as booleans. The returned mapping is read-only.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Acronym file {path} must contain a mapping, got {type(data).__name__}.")

    table = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise ValueError(f"Acronym file {path} has non-string key {key!r}; quote it.")
        definitions = [value] if isinstance(value, str) else value
        if not isinstance(definitions, list) or not definitions:
            raise ValueError(f"Acronym '{key}' in {path} must have at least one definition.")
        if not all(isinstance(definition, str) for definition in definitions):
            raise ValueError(f"Acronym '{key}' in {path} has a non-string definition.")
        table[key] = tuple(definitions)

    logger.info(f"Loaded {len(table)} acronyms from {path}")
    return MappingProxyType(table)


def resolve(key: str, table: AcronymTable) -> List[str]:
    """Looks up ``key`` exactly as typed; never returns an empty list."""
    definitions = table.get(key)
    if not definitions:
        logger.info(f"No definition found for '{key}'.")
        return [NOT_FOUND_TEMPLATE.format(key=key)]
    return list(definitions)
