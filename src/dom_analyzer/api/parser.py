"""Parser collaborator entry point.

``parse_markup`` validates the input against the parsing configuration and
delegates to the configured adapter. It either returns a document root or
raises :class:`ParseError`; it never returns a partial tree.
"""

from typing import Any, Optional

from dom_analyzer.api.adapters import ParseError, get_adapter
from dom_analyzer.shared import ParsingConfig, get_logger
from dom_analyzer.tree.nodes import DocumentRoot, max_depth

# Max length for content preview in logs
PREVIEW_LENGTH = 60


def parse_markup(
    text: Any,
    config: Optional[ParsingConfig] = None,
    correlation_id: Optional[str] = None,
) -> DocumentRoot:
    """Parse markup text into a document tree.

    Args:
        text: Markup to parse
        config: Parsing configuration (backend, size and nesting limits,
            empty-input policy)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        DocumentRoot of the parsed tree

    Raises:
        ParseError: The input was rejected or the backend failed

    Examples:
        >>> root = parse_markup('<div class="x"><p>Hi</p></div>')
        >>> root.children[0].tag_name
        'div'
    """
    config = config or ParsingConfig()
    logger = get_logger(__name__, correlation_id, "parse")

    if not isinstance(text, str):
        raise ParseError(
            f"Markup must be text, not {type(text).__name__}",
            backend=config.backend,
        )

    if config.max_input_size_bytes is not None:
        size = len(text.encode("utf-8"))
        if size > config.max_input_size_bytes:
            raise ParseError(
                f"Input is {size} bytes, larger than the "
                f"{config.max_input_size_bytes} byte limit",
                backend=config.backend,
            )

    if config.reject_empty_input and not text.strip():
        raise ParseError("Input is empty", backend=config.backend)

    adapter = get_adapter(config.backend)
    logger.debug(
        "Delegating to parser backend",
        extra={
            "backend": config.backend,
            "content_length": len(text),
            "preview": text[:PREVIEW_LENGTH],
        },
    )
    root = adapter.parse(text)

    if config.max_nesting_depth is not None:
        depth = max_depth(root)
        if depth > config.max_nesting_depth:
            raise ParseError(
                f"Elements are nested {depth} deep, more than the "
                f"{config.max_nesting_depth} level limit",
                backend=config.backend,
            )
    return root
