"""Tree-sitter parser access for the shell and Go adapters."""

from functools import lru_cache
from typing import Any

from hazardous.exceptions import ParseFailure

SUPPORTED_LANGUAGES = ("bash", "go")


@lru_cache(maxsize=None)
def get_ts_parser(language: str) -> Any:
    """Return a cached tree-sitter parser for ``language``."""
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {language}")

    from tree_sitter_language_pack import get_parser

    try:
        return get_parser(language)
    except Exception as e:
        raise RuntimeError(
            f"Failed to load tree-sitter grammar for {language}: {e}\n"
            "Please try: pip install --force-reinstall tree-sitter-language-pack"
        ) from e


def _first_error(node: Any) -> Any | None:
    """Depth-first search for the first ERROR or MISSING node."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        stack.extend(child for child in reversed(current.children) if child.has_error)
    return None


def parse_source(content: str, language: str, file_path: str) -> Any:
    """Parse ``content`` and return the tree-sitter Tree.

    Raises:
        ParseFailure: if the tree contains syntax errors
    """
    parser = get_ts_parser(language)
    tree = parser.parse(content.encode("utf-8"))

    if tree.root_node.has_error:
        bad = _first_error(tree.root_node)
        if bad is not None:
            raise ParseFailure(
                file_path,
                f"syntax error near {bad.type!r}",
                line=bad.start_point[0] + 1,
                col=bad.start_point[1] + 1,
            )
        raise ParseFailure(file_path, "syntax error")

    return tree
