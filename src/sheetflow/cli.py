from __future__ import annotations

import argparse
import functools
import json
import logging
from pathlib import Path
from typing import Any

import anyio
from pydantic import BaseModel, Field

from .config import SheetflowConfig
from .errors import SheetflowError
from .workbook import create_workbook, define_sheet

logger = logging.getLogger(__name__)


class SheetSource(BaseModel):
    """One sheet definition file paired with its data file."""

    definition: Path
    data: Path


class RenderConfig(BaseModel):
    """Configuration for the `render` command."""

    sheets: list[SheetSource] = Field(..., min_length=1)
    output: Path
    timeout: float | None = Field(default=None, ge=0)
    log_level: str = Field(default="WARNING", description="Logging level.")
    log_file: Path | None = Field(default=None, description="Optional log file path.")


def main(argv: list[str] | None = None) -> int:
    """Run the sheetflow CLI.

    Args:
        argv: Optional CLI arguments for testing.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    config = _parse_args(argv)
    _configure_logging(config)
    try:
        run_render(config)
    except (SheetflowError, OSError, ValueError) as exc:
        logger.error("Render failed: %s", exc)
        return 1
    return 0


def run_render(config: RenderConfig) -> Path:
    """Build every configured sheet and save the workbook.

    Args:
        config: Render configuration.

    Returns:
        Path of the written workbook.
    """
    workbook = create_workbook(config=SheetflowConfig.from_env())
    for source in config.sheets:
        definition = define_sheet(_load_json(source.definition))
        records = _load_json(source.data)
        if not isinstance(records, list):
            raise ValueError(f"Data file must contain a JSON array: {source.data}")
        workbook.add_sheet(definition, records)
    anyio.run(functools.partial(workbook.save, config.output, timeout=config.timeout))
    logger.info("Wrote %s", config.output)
    return config.output


def _load_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def _parse_args(argv: list[str] | None) -> RenderConfig:
    """Parse CLI arguments into a render configuration."""
    env_config = SheetflowConfig.from_env()
    parser = argparse.ArgumentParser(
        prog="sheetflow", description="Render styled xlsx files from JSON."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    render = subparsers.add_parser("render", help="Render sheets to an xlsx file.")
    render.add_argument(
        "--sheet",
        nargs=2,
        action="append",
        required=True,
        metavar=("DEFINITION", "DATA"),
        help="Sheet definition JSON and its data JSON (repeatable).",
    )
    render.add_argument("-o", "--output", type=Path, required=True)
    render.add_argument("--timeout", type=float, default=None)
    render.add_argument("--log-level", default=env_config.log_level)
    render.add_argument("--log-file", type=Path, default=None)
    args = parser.parse_args(argv)
    return RenderConfig(
        sheets=[
            SheetSource(definition=Path(definition), data=Path(data))
            for definition, data in args.sheet
        ],
        output=args.output,
        timeout=args.timeout,
        log_level=args.log_level,
        log_file=args.log_file,
    )


def _configure_logging(config: RenderConfig) -> None:
    """Configure logging for the CLI process.

    Args:
        config: Render configuration.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_file is not None:
        handlers.append(logging.FileHandler(config.log_file))
    logging.basicConfig(
        level=config.log_level.upper(),
        handlers=handlers,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
