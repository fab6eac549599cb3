"""Command-line interface for html2haml."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from lxml import etree
from pydantic import ValidationError

from .converter import render
from .errors import HamlError
from .io_utils import STDIO, read_input, warn, write_output
from .options import ConversionOptions, load_options


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="html2haml",
        description="Convert HTML (or XHTML) into a Haml template.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=STDIO,
        help="HTML file to convert (default: stdin).",
    )
    parser.add_argument(
        "output",
        nargs="?",
        default=STDIO,
        help="Where to write the Haml (default: stdout).",
    )
    parser.add_argument(
        "-e",
        "--erb",
        action="store_true",
        help="Convert ERB <%%= %%> and <%% %%> tags into Haml = and - lines.",
    )
    parser.add_argument(
        "-x",
        "--xhtml",
        action="store_true",
        help="Parse the input strictly as XHTML.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="YAML file with conversion options (erb, xhtml).",
    )
    return parser


def _resolve_options(args: argparse.Namespace) -> ConversionOptions:
    options = load_options(args.config) if args.config else ConversionOptions()
    updates = {}
    if args.erb:
        updates["erb"] = True
    if args.xhtml:
        updates["xhtml"] = True
    if not updates:
        return options
    return ConversionOptions.model_validate({**options.model_dump(), **updates})


def _handle_convert(args: argparse.Namespace) -> None:
    try:
        options = _resolve_options(args)
    except ValidationError as exc:
        raise SystemExit(f"Invalid options in {args.config}: {exc}") from exc
    except (HamlError, OSError) as exc:
        warn(f"html2haml: {exc}")
        raise SystemExit(1) from exc

    try:
        haml = render(read_input(args.input), options)
    except OSError as exc:
        warn(f"html2haml: {exc}")
        raise SystemExit(1) from exc
    except (HamlError, etree.XMLSyntaxError) as exc:
        warn(f"html2haml: {args.input}: {exc}")
        raise SystemExit(1) from exc

    write_output(args.output, haml)
    if args.output != STDIO:
        print(f"Wrote {args.output}")


def main(argv: Optional[list[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    _handle_convert(args)


if __name__ == "__main__":
    main(sys.argv[1:])
