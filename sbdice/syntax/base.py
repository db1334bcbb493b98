"""Grammar loading and tree-sitter helpers.

Provides lazy language bindings and the extension table that decides which
grammar parses a given file.
"""

from pathlib import Path

from tree_sitter import Language, Node, Parser

from sbdice.errors import UnsupportedFileError

# Lazy imports for tree-sitter language bindings
_LANGUAGES: dict[str, Language] = {}


def _get_language(name: str) -> Language | None:
    """Lazily load tree-sitter language bindings."""
    if name in _LANGUAGES:
        return _LANGUAGES[name]

    if name == "typescript":
        import tree_sitter_typescript as ts_typescript

        _LANGUAGES[name] = Language(ts_typescript.language_typescript())
    elif name == "tsx":
        import tree_sitter_typescript as ts_typescript

        _LANGUAGES[name] = Language(ts_typescript.language_tsx())
    elif name == "javascript":
        import tree_sitter_javascript as ts_javascript

        _LANGUAGES[name] = Language(ts_javascript.language())
    else:
        return None

    return _LANGUAGES[name]


# File extension to language mapping
EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}

SUPPORTED_EXTENSIONS = frozenset(EXTENSION_TO_LANGUAGE)


def language_for_path(path: Path) -> str:
    """Return the grammar name for a file path.

    Raises:
        UnsupportedFileError: If the extension is not a supported one.
    """
    language = EXTENSION_TO_LANGUAGE.get(path.suffix.lower())
    if language is None:
        supported = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise UnsupportedFileError(
            f"Unsupported file type '{path.suffix or path.name}' (expected one of: {supported})"
        )
    return language


def get_parser(language: str) -> Parser:
    """Create a tree-sitter parser for a language name."""
    lang = _get_language(language)
    if lang is None:
        raise UnsupportedFileError(f"Unknown language: {language}")
    return Parser(lang)


def _find_first_error(node: Node) -> Node | None:
    """Return the first ERROR or missing node in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.is_error or current.is_missing:
            return current
        # Only subtrees flagged has_error can hold one
        stack.extend(child for child in reversed(current.children) if child.has_error or child.is_missing)
    return None
