# File: crudgen/cli.py
"""
crudgen - Command-Line Interface
=================================

argparse-based CLI for the scaffold generator.

Usage examples::

    # Interactive: prompts for the number of fields, then name + type
    crudgen make Product

    # Non-interactive
    crudgen make Product --field title:text --field price:integer

    # Regenerate an existing module in another app, without writing anything
    crudgen make Product --app-root ./shop --force --dry-run -v

    # Show version
    crudgen --version

Exit codes:
    0 - success
    1 - validation error
    2 - generation error
    3 - module already exists
    4 - input/argument error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, NoReturn, Optional, Sequence

from pydantic import ValidationError

from crudgen.exceptions import ArtifactWriteError, ModuleExistsError
from crudgen.models import FieldSpec, FieldType, ModuleSpec, ScaffoldConfig

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("crudgen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_VALIDATION_ERROR: int = 1
EXIT_GENERATION_ERROR: int = 2
EXIT_MODULE_EXISTS: int = 3
EXIT_INPUT_ERROR: int = 4

FIELD_TYPE_CHOICES: List[str] = [t.value for t in FieldType]

InputFn = Callable[[str], str]


class InputError(ValueError):
    """Operator input that cannot be turned into a module spec."""


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the ``crudgen`` logger.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    formatter: logging.Formatter = logging.Formatter(fmt, datefmt="%H:%M:%S")
    handler.setFormatter(formatter)

    root_logger: logging.Logger = logging.getLogger("crudgen")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from crudgen import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="crudgen",
        description=(
            "crudgen - admin CRUD scaffold generator.\n\n"
            "Creates the table, SQLAlchemy model, FastAPI handler, Jinja2 views, "
            "route registration and menu entry for one module."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"crudgen v{__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    make = subparsers.add_parser(
        "make",
        help="Generate a CRUD module.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s Product\n"
            "  %(prog)s Product --field title:text --field price:integer\n"
            "  %(prog)s Product --force --dry-run -v\n"
        ),
    )
    make.add_argument("name", metavar="NAME", help="Module name, e.g. 'Product'.")

    fields_group = make.add_argument_group("fields")
    fields_group.add_argument(
        "-f", "--field",
        dest="fields",
        action="append",
        default=None,
        metavar="NAME:TYPE",
        help=(
            "Declare a field (repeatable); skips the interactive prompts. "
            f"TYPE is one of: {', '.join(FIELD_TYPE_CHOICES)} (default text)."
        ),
    )

    config_group = make.add_argument_group("configuration overrides")
    config_group.add_argument(
        "--app-root", default=".", metavar="DIR",
        help="Root directory of the target application (default: current directory).",
    )
    config_group.add_argument(
        "--config", default=None, metavar="FILE",
        help="Settings file (YAML or JSON). Defaults to crudgen.yaml/.json in the app root.",
    )
    config_group.add_argument(
        "--database-url", default=None, metavar="URL",
        help="SQLAlchemy URL of the application database.",
    )
    config_group.add_argument(
        "--package", dest="package_name", default=None, metavar="NAME",
        help="Python package of the target application (default: app).",
    )
    config_group.add_argument(
        "--page-size", type=int, default=None, metavar="N",
        help="Rows per page on the list view (default: 10).",
    )

    behaviour_group = make.add_argument_group("behaviour flags")
    behaviour_group.add_argument(
        "--force", action="store_true", default=False,
        help="Regenerate a module whose artifacts already exist.",
    )
    behaviour_group.add_argument(
        "--dry-run", action="store_true", default=False,
        help="Render everything but write no files and touch no database.",
    )
    behaviour_group.add_argument(
        "--manifest", default=None, metavar="FILE",
        help="Write a JSON manifest of the generated files.",
    )

    verbosity_group = make.add_argument_group("verbosity")
    verbosity_group.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG).",
    )
    verbosity_group.add_argument(
        "-q", "--quiet", action="store_true", default=False,
        help="Suppress all output except errors.",
    )

    return parser


# ---------------------------------------------------------------------------
# Field input
# ---------------------------------------------------------------------------


def parse_field_option(raw: str) -> Dict[str, str]:
    """Parse ``NAME[:TYPE]`` into a field mapping."""
    name, _, type_token = raw.partition(":")
    name = name.strip()
    type_token = type_token.strip() or FieldType.TEXT.value
    if not name:
        raise InputError(f"Field declaration '{raw}' has no name.")
    if type_token not in FIELD_TYPE_CHOICES:
        raise InputError(
            f"Unknown field type '{type_token}' for '{name}'. "
            f"Choose one of: {', '.join(FIELD_TYPE_CHOICES)}."
        )
    return {"identifier": name, "type": type_token}


def _ask_type(index: int, input_fn: InputFn) -> str:
    options: str = ", ".join(f"[{n}] {t}" for n, t in enumerate(FIELD_TYPE_CHOICES))
    while True:
        answer: str = input_fn(f"Field #{index} type ({options}) [text]: ").strip()
        if not answer:
            return FieldType.TEXT.value
        if answer.isdigit() and int(answer) < len(FIELD_TYPE_CHOICES):
            return FIELD_TYPE_CHOICES[int(answer)]
        if answer in FIELD_TYPE_CHOICES:
            return answer
        print(f"  '{answer}' is not a valid choice.")


def prompt_fields(input_fn: InputFn = input) -> List[Dict[str, str]]:
    """
    Ask for the number of fields, then each field's name and type.

    Raises:
        InputError: the input stream ended before the answers were complete.
    """
    try:
        while True:
            raw_count: str = input_fn(
                "How many fields (excluding 'id' and timestamps)? [0]: "
            ).strip()
            if not raw_count:
                count: int = 0
                break
            if raw_count.isdigit():
                count = int(raw_count)
                break
            print(f"  '{raw_count}' is not a number.")

        fields: List[Dict[str, str]] = []
        for index in range(1, count + 1):
            name: str = ""
            while not name:
                name = input_fn(f"Field #{index} name: ").strip()
            fields.append({"identifier": name, "type": _ask_type(index, input_fn)})
    except EOFError as exc:
        raise InputError("Input ended before all fields were declared.") from exc
    return fields


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def _run_make(args: argparse.Namespace, config: ScaffoldConfig, input_fn: InputFn) -> int:
    from crudgen.generator import GenerationReport, ScaffoldGenerator
    from crudgen.naming import derive_naming

    echo: Callable[[str], None] = (lambda _msg: None) if args.quiet else print
    try:
        display_name: str = derive_naming(args.name, config.admin_segment).type_name
    except ValueError as exc:
        logger.error("%s", exc)
        return EXIT_VALIDATION_ERROR

    echo(f"Generating CRUD module [{display_name}]...")

    try:
        if args.fields:
            raw_fields: List[Dict[str, str]] = [parse_field_option(f) for f in args.fields]
        else:
            raw_fields = prompt_fields(input_fn)
    except InputError as exc:
        logger.error("%s", exc)
        return EXIT_INPUT_ERROR

    if not raw_fields:
        echo("No fields provided. Adding default 'name' field.")

    try:
        spec: ModuleSpec = ModuleSpec(
            name=args.name, fields=[FieldSpec.model_validate(f) for f in raw_fields]
        )
    except ValidationError as exc:
        for err in exc.errors():
            logger.error("Invalid module definition: %s", err["msg"])
        echo("✗ Invalid module definition; nothing was generated.")
        return EXIT_VALIDATION_ERROR

    try:
        report: GenerationReport = ScaffoldGenerator(config).generate(spec)
    except ModuleExistsError as exc:
        logger.error("%s", exc)
        echo(f"✗ {exc}")
        return EXIT_MODULE_EXISTS

    for step in report.step_metrics:
        echo(f"  {'✓' if step.success else '✗'} {step.step_name}: {step.detail}")
    if report.menu_entry_added:
        echo(f"Admin menu [{display_name}] added ✅")
    if args.verbose:
        echo(report.summary())

    if args.manifest and report.manifest is not None:
        from crudgen.utils import write_file

        try:
            write_file(Path(args.manifest), report.manifest.to_json() + "\n")
        except OSError as exc:
            logger.error("%s", ArtifactWriteError(args.manifest, str(exc)))
            return EXIT_GENERATION_ERROR

    if report.validation_errors:
        for err in report.validation_errors:
            echo(f"  ✗ {err}")
        return EXIT_VALIDATION_ERROR
    if not report.success:
        return EXIT_GENERATION_ERROR

    echo(f"CRUD module [{display_name}] generated successfully ✅")
    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None, input_fn: InputFn = input) -> NoReturn:
    """
    Main CLI entry point.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
        input_fn: Prompt function used when no ``--field`` is given.
    """
    from crudgen.generator import load_config

    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.quiet:
        verbosity: int = -1
        logging.disable(logging.WARNING)
    else:
        verbosity = args.verbose
        logging.disable(logging.NOTSET)
    _setup_logging(verbosity)

    app_root: Path = Path(args.app_root).resolve()
    if not app_root.is_dir():
        logger.error("App root is not a directory: %s", app_root)
        sys.exit(EXIT_INPUT_ERROR)

    try:
        config: ScaffoldConfig = load_config(
            app_root,
            Path(args.config) if args.config else None,
            database_url=args.database_url,
            package_name=args.package_name,
            page_size=args.page_size,
            overwrite_existing=args.force or None,
            dry_run=args.dry_run or None,
        )
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(EXIT_INPUT_ERROR)

    logger.info("App root: %s", config.app_path)
    logger.info("Database: %s", config.database_url)

    exit_code: int = _run_make(args, config, input_fn)
    if exit_code != EXIT_SUCCESS:
        logger.error("Generation failed with exit code %d.", exit_code)
    sys.exit(exit_code)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "InputError",
    "parse_field_option",
    "prompt_fields",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "EXIT_GENERATION_ERROR",
    "EXIT_MODULE_EXISTS",
    "EXIT_INPUT_ERROR",
]
