"""CLI interface for sbdice.

Provides commands for dicing a file, restoring it from its mapping, and
dicing a whole directory.
"""

import sys
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env before importing other sbdice modules
# This ensures env vars are set before module-level code reads them
load_dotenv()

from sbdice import __version__  # noqa: E402
from sbdice.errors import (  # noqa: E402
    MappingError,
    ParseError,
    ReadError,
    SbDiceError,
    UnsupportedFileError,
)

# Exit codes by failure kind
EXIT_UNSUPPORTED = 2
EXIT_READ = 3
EXIT_PARSE = 4
EXIT_MAPPING = 5
EXIT_WRITE = 8


def _exit_code(error: Exception) -> int:
    if isinstance(error, UnsupportedFileError):
        return EXIT_UNSUPPORTED
    if isinstance(error, ReadError):
        return EXIT_READ
    if isinstance(error, ParseError):
        return EXIT_PARSE
    if isinstance(error, MappingError):
        return EXIT_MAPPING
    return EXIT_WRITE


def _fail(prefix: str, error: Exception) -> None:
    click.echo(f"{prefix}: {error}", err=True)
    click.echo("Run 'sbdice --help' for usage.", err=True)
    sys.exit(_exit_code(error))


@click.group()
@click.version_option(version=__version__, prog_name="sbdice")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logger level (default: SBDICE_LOG_LEVEL or INFO)",
)
def cli(log_level: str | None) -> None:
    """sbdice - replace string literals with numbered placeholders.

    Every plain string literal of a TypeScript/JavaScript file becomes "0",
    "1", ... in source order. Template string text is left alone. A JSON
    mapping file records the original values.
    """
    if log_level:
        from sbdice.logging import set_log_level

        set_log_level(log_level)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the output files (default: next to the input)",
)
@click.option("--keep-comments", is_flag=True, help="Keep comments in the rewritten code")
def dice(file_path: Path, output_dir: Path | None, keep_comments: bool) -> None:
    """Replace the string literals of one file.

    FILE_PATH: A .ts/.tsx/.js file. Writes <name>_r.<ext> and <name>_s.json.
    """
    from sbdice.config import DiceConfig
    from sbdice.pipeline import dice_file

    config = DiceConfig.from_env(output_dir=output_dir, strip_comments=not keep_comments)
    try:
        report = dice_file(file_path, config)
    except (SbDiceError, OSError) as e:
        _fail("Dice failed", e)
        return

    click.echo(f"Wrote {report.code_path} and {report.mapping_path} ({report.literal_count} strings)")


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("mapping_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the restored file (default: next to the input)",
)
def restore(file_path: Path, mapping_path: Path, output_dir: Path | None) -> None:
    """Put original strings back into a rewritten file.

    FILE_PATH: The rewritten file (<name>_r.<ext>).
    MAPPING_PATH: Its mapping file (<name>_s.json).
    """
    from sbdice.config import DiceConfig
    from sbdice.pipeline import restore_file

    config = DiceConfig.from_env(output_dir=output_dir)
    try:
        report = restore_file(file_path, mapping_path, config)
    except (SbDiceError, OSError) as e:
        _fail("Restore failed", e)
        return

    click.echo(f"Wrote {report.output_path} ({report.restored_count} strings restored)")
    if report.unknown_placeholders or report.unused_keys:
        click.echo(
            f"Warning: {len(report.unknown_placeholders)} unknown placeholders, "
            f"{len(report.unused_keys)} unused mapping entries",
            err=True,
        )


@cli.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path))
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Worker processes (default: SBDICE_WORKERS or 1)")
@click.option("--keep-comments", is_flag=True, help="Keep comments in the rewritten code")
def batch(directory: Path, workers: int | None, keep_comments: bool) -> None:
    """Dice every supported file below a directory.

    DIRECTORY: Root directory. Prints a JSON report; failing files are
    listed under "errors" and make the exit code non-zero.
    """
    from sbdice.config import DiceConfig
    from sbdice.pipeline import dice_directory

    config = DiceConfig.from_env(workers=workers, strip_comments=not keep_comments)
    report = dice_directory(directory, config)
    click.echo(report.model_dump_json(indent=2))
    if report.errors:
        sys.exit(1)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
