"""Component documentation: resolve README files, parse and render them.

Each component keeps its documentation in ``<components_dir>/<id>/README.md``.
A missing or unreadable README results in an empty document, never an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import json
import logging
from pathlib import Path
from typing import Any

from md_nodes.block import render_document
from md_nodes.config import DEFAULT_CONFIG, RenderConfig
from md_nodes.converter import nodes_to_data
from md_nodes.nodes import Node
from md_nodes.parser import parse_markdown
from md_nodes.tokens import Token

LOGGER = logging.getLogger(__name__)

README_NAME = 'README.md'


def readme_path(components_dir: Path, component_id: str) -> Path:
    return components_dir / component_id / README_NAME


def load_component_tokens(
    components_dir: Path,
    component_id: str,
    config: RenderConfig = DEFAULT_CONFIG,
) -> tuple[Token, ...]:
    """Read and parse one component's README.

    Args:
        components_dir: Directory with one subdirectory per component
        component_id: Component identifier (subdirectory name)
        config: Rendering configuration

    Returns:
        Parsed tokens, empty if the README is missing or unreadable
    """
    path = readme_path(components_dir, component_id)
    try:
        raw = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        LOGGER.warning('No README.md found for %r, skipping: %s', component_id, e)
        return ()
    return parse_markdown(raw, config)


def load_component_docs(
    components_dir: Path,
    component_ids: Iterable[str],
    config: RenderConfig = DEFAULT_CONFIG,
) -> dict[str, tuple[Node, ...]]:
    """Render documentation for every component id, keyed by id."""
    return {
        component_id: render_document(
            load_component_tokens(components_dir, component_id, config), config
        )
        for component_id in component_ids
    }


def docs_to_data(docs: Mapping[str, Iterable[Node]]) -> dict[str, list[Any]]:
    """Serialize rendered documentation into JSON-ready data."""
    return {component_id: nodes_to_data(nodes) for component_id, nodes in docs.items()}


def write_docs_bundle(docs: Mapping[str, Iterable[Node]], output_file: Path) -> int:
    """Write rendered documentation to a JSON file.

    Args:
        docs: Rendered documentation keyed by component id
        output_file: Destination path, parent directories are created

    Returns:
        Number of components with non-empty documentation
    """
    data = docs_to_data(docs)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')

    loaded = sum(1 for nodes in data.values() if nodes)
    LOGGER.info('Wrote %d/%d component docs to %s', loaded, len(data), output_file)
    return loaded
