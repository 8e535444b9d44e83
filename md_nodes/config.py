"""Configuration for rendering token trees into display nodes."""

from dataclasses import dataclass

from md_nodes.tokens import Alignment


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for rendering.

    This is an immutable dataclass with sensible defaults.

    Attributes:
        default_code_language: Label shown for code blocks without a language
            (default: 'text')
        default_alignment: Column alignment used when a table column has none
            (default: 'left')
        mistune_plugins: Mistune plugins enabled when parsing Markdown text
    """

    default_code_language: str = 'text'
    default_alignment: Alignment = 'left'

    # strikethrough -> del, table -> tables with rows fitted to the header width,
    # task_lists -> task list items, url -> autolinks for bare URLs
    mistune_plugins: tuple[str, ...] = ('strikethrough', 'table', 'task_lists', 'url')


# Default configuration instance
DEFAULT_CONFIG = RenderConfig()
