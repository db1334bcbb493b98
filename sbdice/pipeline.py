"""Dice and restore drivers.

dice: parse -> substitute literals -> render -> build mapping.
restore: parse a rewritten file -> put originals back -> render.

The file-level functions write `<stem>_r<ext>` and `<stem>_s.json` next to
the input (or into DiceConfig.output_dir).
"""

import multiprocessing
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from sbdice.config import DiceConfig
from sbdice.errors import ReadError, SbDiceError
from sbdice.logging import log_operation, logger, progress_bar
from sbdice.models.mapping import BatchReport, DiceReport, RestoreReport
from sbdice.substitution.mapping import build_mapping, dump_mapping, load_mapping
from sbdice.substitution.visitor import LiteralRestorer, LiteralVisitor
from sbdice.syntax.base import SUPPORTED_EXTENSIONS, language_for_path
from sbdice.syntax.parser import parse_source
from sbdice.syntax.render import render

# Use 'spawn' context to avoid inheriting lock state when forking from threads
_MP_CONTEXT = multiprocessing.get_context("spawn")

# Directories never descended into by dice_directory
SKIP_DIRS = frozenset({
    "node_modules", "bower_components", "vendor",
    "dist", "build", "out", "coverage",
    "__pycache__", "venv",
})


@dataclass
class DiceResult:
    """In-memory result of substituting one source text."""

    code: str
    mapping: dict[str, str]
    count: int


@dataclass
class RestoreResult:
    """In-memory result of restoring one rewritten source text."""

    code: str
    restored: int
    unknown: list[str] = field(default_factory=list)
    unused: list[str] = field(default_factory=list)


def dice_source(
    source: str | bytes,
    language: str = "typescript",
    config: DiceConfig | None = None,
) -> DiceResult:
    """Replace every string literal in source with its placeholder index.

    Args:
        source: Source text.
        language: Grammar name.
        config: Options; only strip_comments applies here.

    Returns:
        Rewritten code, the placeholder mapping and the literal count.

    Raises:
        ParseError: If the source has syntax errors.
    """
    config = config or DiceConfig()
    tree = parse_source(source, language)

    visitor = LiteralVisitor()
    visitor.visit(tree.root)

    code = render(tree, strip_comments=config.strip_comments)
    mapping = build_mapping(visitor.originals)
    return DiceResult(code=code, mapping=mapping, count=visitor.counter)


def restore_source(
    source: str | bytes,
    mapping: dict[str, str],
    language: str = "typescript",
    config: DiceConfig | None = None,
) -> RestoreResult:
    """Put original string values back in place of placeholders.

    Quoting and escaping are regenerated; only the text is restored.
    """
    config = config or DiceConfig()
    tree = parse_source(source, language)

    restorer = LiteralRestorer(mapping)
    restorer.visit(tree.root)

    if restorer.unknown:
        logger.warning("%d string literals are not placeholders of this mapping", len(restorer.unknown))
    if restorer.unused:
        logger.warning("%d mapping entries have no placeholder in the file", len(restorer.unused))

    return RestoreResult(
        code=render(tree, strip_comments=config.strip_comments),
        restored=restorer.restored,
        unknown=restorer.unknown,
        unused=restorer.unused,
    )


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Failed to read {path}: {e}") from e


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def dice_file(path: Path, config: DiceConfig | None = None) -> DiceReport:
    """Dice one file and write the rewritten code and its mapping.

    Raises:
        UnsupportedFileError: If the extension is not supported.
        ReadError: If the file cannot be read.
        ParseError: If the file has syntax errors.
        OSError: If an output file cannot be written.
    """
    config = config or DiceConfig()
    path = Path(path)
    language = language_for_path(path)
    source = _read_text(path)

    with log_operation("dice", {"file": path.name}):
        result = dice_source(source, language, config)

    code_path = config.code_path(path)
    mapping_path = config.mapping_path(path)
    _write_text(code_path, result.code)
    _write_text(mapping_path, dump_mapping(result.mapping))
    logger.info("  %s: %d string literals replaced", path.name, result.count)

    return DiceReport(
        source=str(path),
        code_path=str(code_path),
        mapping_path=str(mapping_path),
        literal_count=result.count,
        language=language,
    )


def restore_file(
    path: Path,
    mapping_path: Path,
    config: DiceConfig | None = None,
) -> RestoreReport:
    """Restore a rewritten file from its mapping file.

    Raises:
        UnsupportedFileError: If the extension is not supported.
        ReadError: If either file cannot be read.
        MappingError: If the mapping file is malformed.
        ParseError: If the rewritten file has syntax errors.
        OSError: If the output file cannot be written.
    """
    config = config or DiceConfig()
    path = Path(path)
    mapping_path = Path(mapping_path)
    language = language_for_path(path)
    source = _read_text(path)
    try:
        mapping = load_mapping(mapping_path)
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Failed to read {mapping_path}: {e}") from e

    with log_operation("restore", {"file": path.name}):
        result = restore_source(source, mapping, language, config)

    output_path = config.restore_path(path)
    _write_text(output_path, result.code)

    return RestoreReport(
        source=str(path),
        mapping_path=str(mapping_path),
        output_path=str(output_path),
        restored_count=result.restored,
        unknown_placeholders=result.unknown,
        unused_keys=result.unused,
    )


def should_skip_path(rel_path: Path, skip_dirs: frozenset[str] = SKIP_DIRS) -> bool:
    """Check if a path relative to the batch root should be skipped."""
    return any(part.startswith(".") or part in skip_dirs for part in rel_path.parent.parts)


def find_source_files(directory: Path, config: DiceConfig | None = None) -> list[Path]:
    """List supported source files below directory, in sorted order.

    Skips hidden and dependency/build directories and files this tool wrote.
    """
    config = config or DiceConfig()
    files = []
    for filepath in sorted(directory.rglob("*")):
        if filepath.suffix.lower() not in SUPPORTED_EXTENSIONS or not filepath.is_file():
            continue
        if should_skip_path(filepath.relative_to(directory)) or config.is_output_file(filepath):
            continue
        files.append(filepath)
    return files


def _dice_file_to_dict(path: Path, config: DiceConfig) -> dict:
    """Worker entry point; returns plain data so it pickles across processes."""
    try:
        return {"report": dice_file(path, config).model_dump()}
    except (SbDiceError, OSError) as e:
        return {"error": str(e), "file": str(path)}
    except Exception as e:
        # Unexpected failure, recorded like any other
        logger.exception("Unexpected failure dicing %s", path)
        return {"error": f"{type(e).__name__}: {e}", "file": str(path)}


def dice_directory(directory: Path, config: DiceConfig | None = None) -> BatchReport:
    """Dice every supported file below a directory.

    Files are independent, so with config.workers > 1 they are processed in
    a process pool. A failing file is recorded in the report and does not
    stop the batch.
    """
    config = config or DiceConfig()
    directory = Path(directory).resolve()
    files = find_source_files(directory, config)
    report = BatchReport(directory=str(directory), file_count=len(files))

    results: list[dict] = []
    with log_operation("dice_directory", {"dir": directory.name, "files": len(files)}):
        if config.workers > 1 and len(files) > 1:
            logger.info("  Dicing %d files with %d workers", len(files), config.workers)
            with ProcessPoolExecutor(max_workers=config.workers, mp_context=_MP_CONTEXT) as executor:
                future_to_path = {executor.submit(_dice_file_to_dict, path, config): path for path in files}
                for future in progress_bar(as_completed(future_to_path), desc="Dicing", total=len(files), unit="files"):
                    try:
                        results.append(future.result())
                    except Exception as e:
                        results.append({"error": str(e), "file": str(future_to_path[future])})
        else:
            for path in progress_bar(files, desc="Dicing", total=len(files), unit="files"):
                results.append(_dice_file_to_dict(path, config))

    for result in sorted(results, key=lambda r: r.get("file") or r["report"]["source"]):
        if "error" in result:
            logger.warning("  Skipped %s: %s", result["file"], result["error"])
            report.errors.append(result)
        else:
            file_report = DiceReport.model_validate(result["report"])
            report.files.append(file_report)
            report.literal_count += file_report.literal_count

    return report
