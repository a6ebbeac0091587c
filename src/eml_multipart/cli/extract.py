"""
Command-line interface for multipart part extraction.

Lists, filters and saves the body parts of .eml files.

Usage:
    # List every part of a message
    eml-multipart input.eml

    # Only attachments, saved to a directory
    eml-multipart input.eml --filter attachments --save-dir out/

    # Print the combined inline text
    eml-multipart input.eml --inline-text
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from eml_multipart.classification.predicates import (
    is_any_part,
    is_attachment,
    is_html_part,
    is_inline_text_part,
    is_plain_text_part,
    is_text_part,
)
from eml_multipart.errors import MultipartError
from eml_multipart.extraction.collector import combine_parts, get_parts
from eml_multipart.logging_config import get_logger, setup_logging
from eml_multipart.models.part import Part
from eml_multipart.version import PARSER_VERSION

logger = get_logger(__name__)

FILTERS = {
    "all": is_any_part,
    "text": is_text_part,
    "plain": is_plain_text_part,
    "html": is_html_part,
    "attachments": is_attachment,
    "inline": is_inline_text_part,
}


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def part_to_record(part: Part) -> dict:
    """
    Summarize a part as a JSON-serializable dict (content excluded).

    Args:
        part: Materialized part

    Returns:
        Dict with index, type, disposition, filename, size and headers
    """
    return {
        "index": part.index,
        "content_type": part.content_type,
        "disposition": part.disposition,
        "filename": part.filename,
        "size_bytes": part.size,
        "headers": [[name, str(value)] for name, value in part.headers.items()],
    }


def save_parts(parts: List[Part], save_dir: Path) -> List[Path]:
    """
    Write each part's content to save_dir.

    Parts without a filename are saved as ``part-<index>.bin``. Only the base
    name of a declared filename is used.

    Returns:
        Paths written, in part order
    """
    save_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for part in parts:
        name = Path(part.filename).name if part.filename else ""
        if not name:
            name = f"part-{part.index}.bin"
        path = save_dir / f"{part.index}-{name}"
        path.write_bytes(part.content)
        written.append(path)
        logger.info("part_saved", path=str(path), size_bytes=part.size)
    return written


def process_file(eml_path: Path, filter_name: str = "all") -> List[Part]:
    """
    Collect the parts of one .eml file matching a named filter.

    Raises:
        MultipartError: On any structural failure
    """
    with open(eml_path, "rb") as f:
        return get_parts(f, FILTERS[filter_name])


def write_output(records: List[dict], output_path: Optional[Path], format: str = "jsonl"):
    """
    Write records to a file or stdout.

    Args:
        records: Part records
        output_path: Output file path (stdout when None)
        format: Output format ("json" or "jsonl")
    """
    if format == "jsonl":
        text = "".join(json.dumps(record, ensure_ascii=False) + "\n" for record in records)
    else:
        text = json.dumps(records, ensure_ascii=False, indent=2) + "\n"

    if not output_path:
        sys.stdout.write(text)
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    logger.info("output_written", path=str(output_path), count=len(records))


# ============================================================================
# MAIN CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eml-multipart",
        description="Extract and classify the body parts of a multipart .eml file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List all parts as JSON lines
  %(prog)s input.eml

  # Attachments only, saved to disk
  %(prog)s input.eml --filter attachments --save-dir attachments/

  # Combined inline text (text parts that are not attachments)
  %(prog)s input.eml --inline-text
        """,
    )

    parser.add_argument("input", type=str, help="Path to .eml file")

    parser.add_argument(
        "--filter",
        "-F",
        choices=sorted(FILTERS),
        default="all",
        help="Which parts to keep (default: all)",
    )

    parser.add_argument(
        "--inline-text",
        action="store_true",
        help="Print the combined inline text instead of part records",
    )

    parser.add_argument(
        "--save-dir",
        "-s",
        type=str,
        default=None,
        help="Directory to write matched part contents to",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )

    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl"],
        default="jsonl",
        help="Output format (default: jsonl)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=PARSER_VERSION,
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging()

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    filter_name = "inline" if args.inline_text else args.filter

    try:
        parts = process_file(input_path, filter_name)
    except MultipartError as e:
        logger.error("cli_failed", error=str(e), error_type=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        logger.info("parts_matched", path=str(input_path), filter=filter_name, count=len(parts))

    if args.save_dir:
        save_parts(parts, Path(args.save_dir))

    if args.inline_text:
        text = combine_parts(parts)
        if args.output:
            Path(args.output).write_text(text, encoding="utf-8")
        else:
            sys.stdout.write(text + "\n")
        return 0

    output_path = Path(args.output) if args.output else None
    write_output([part_to_record(part) for part in parts], output_path, args.format)
    return 0


if __name__ == "__main__":
    sys.exit(main())
