"""Command-line interface for the DDL Protocol Documentation Generator.

WHY: Documentation is regenerated whenever a new game dump is parsed. The
CLI wires the pipeline together (tree dump loading, normalization and
naming across all trees of the run, formatter output, and file saving)
behind a single command.

HOW: Uses argparse to accept one or more tree dump files, the output
directory, a format selection, and a log level. All trees share one
DocumentationRun so protocol names stay unique across files. Status
messages go to stderr; documents are written to the output directory.

RULES:
- Positional arguments: one or more tree dump files (JSON)
- --formats: comma-separated formatter keys (default: DDL_DOCGEN_FORMATS)
- Output naming: {protocol name}{suffix}; files from earlier invocations
  are overwritten, but two outputs of one run never share a file
  (the later one gets " (2)", " (3)", ...)
- Trees without protocols are saved as {key}.json for inspection
- A malformed file or a structurally invalid tree is reported and
  skipped; the remaining trees are still processed
- Exit code 1 if any input failed, or on unknown formats / missing files
- Status output goes to stderr (not stdout)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Set

from ddl_docgen.config import DEFAULT_FORMATS, DEFAULT_LOG_LEVEL, DEFAULT_OUTPUT_DIR
from ddl_docgen.core.errors import StructuralViolation, TreeFormatError
from ddl_docgen.core.ir import ProtocolDocument
from ddl_docgen.core.run import DocumentationRun, NonProtocolArtifact
from ddl_docgen.core.tree import load_trees
from ddl_docgen.formatters import FORMATTERS
from ddl_docgen.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr, flushed immediately."""
    print(msg, file=sys.stderr, flush=True)


def _safe_filename(name: str) -> str:
    """Replace path separators so a protocol name cannot escape the output dir."""
    return name.replace("/", "_").replace("\\", "_")


def _claim_path(stem: str, suffix: str, output_dir: Path, claimed: Set[Path]) -> Path:
    """Pick an output path not yet written in this run.

    Different names can map to the same file ("A/B" and "A_B", or a
    protocol named like a non-protocol key). Later claimants get " (2)",
    " (3)", ... before the suffix.
    """
    stem = _safe_filename(stem)
    path = output_dir / "{}{}".format(stem, suffix)
    count = 1
    while path in claimed:
        count += 1
        path = output_dir / "{} ({}){}".format(stem, count, suffix)
    if count > 1:
        logger.warning("%s%s already written in this run, saving as %s", stem, suffix, path.name)
    claimed.add(path)
    return path


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
    claimed: Set[Path],
) -> Path:
    path = _claim_path(stem, output.suffix, output_dir, claimed)
    path.write_text(output.content, encoding="utf-8")
    return path


def _save_document(
    document: ProtocolDocument,
    format_keys: List[str],
    output_dir: Path,
    claimed: Set[Path],
) -> List[Path]:
    saved: List[Path] = []
    for key in format_keys:
        formatter = FORMATTERS[key]()
        for output in formatter.format(document):
            saved.append(_save_output(output, document.protocol.name, output_dir, claimed))
    return saved


def _save_non_protocol(
    artifact: NonProtocolArtifact,
    output_dir: Path,
    claimed: Set[Path],
) -> Path:
    path = _claim_path(artifact.key, ".json", output_dir, claimed)
    path.write_text(artifact.content, encoding="utf-8")
    return path


def _parse_formats(formats: str) -> List[str]:
    """Split and validate a comma-separated format list.

    Raises:
        ValueError: If a key is not registered in FORMATTERS.
    """
    format_keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in format_keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise ValueError("Unknown format '{}'. Available formats: {}".format(key, available))
    return format_keys


def run(args: argparse.Namespace) -> int:
    """Execute the documentation pipeline and return the exit code.

    RULES:
    - Validate formats and input paths before processing anything
    - One DocumentationRun for all inputs
    - Failures are per file (unreadable/invalid dump) or per tree
      (structural violation); processing continues past both
    """
    try:
        format_keys = _parse_formats(args.formats)
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    input_paths = [Path(p) for p in args.input_files]
    for path in input_paths:
        if not path.is_file():
            print("Error: File not found: {}".format(path), file=sys.stderr)
            return 1

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    documentation_run = DocumentationRun()
    saved_files: List[Path] = []
    claimed: Set[Path] = set()
    failures = 0

    for path in input_paths:
        _status("Loading {}...".format(path))
        try:
            trees = load_trees(path)
        except (TreeFormatError, OSError) as e:
            print("Error: {}".format(e), file=sys.stderr)
            failures += 1
            continue
        _status("  {} tree(s)".format(len(trees)))

        for index, tree in enumerate(trees):
            try:
                result = documentation_run.process_tree(tree)
            except StructuralViolation as e:
                logger.error("Skipping tree %d of %s: %s", index, path, e)
                print("Error: tree {} of {}: {}".format(index, path, e), file=sys.stderr)
                failures += 1
                continue

            if result.non_protocol is not None:
                saved = _save_non_protocol(result.non_protocol, output_dir, claimed)
                saved_files.append(saved)
                _status("  Tree {} has no protocols, saved raw tree: {}".format(index, saved.name))
                continue

            for document in result.documents:
                for saved in _save_document(document, format_keys, output_dir, claimed):
                    saved_files.append(saved)
                    _status("  Saved: {}".format(saved.name))

    _status("")
    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))
    if failures:
        _status("{} input(s) failed".format(failures))
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="ddl_docgen",
        description="Generate NEX protocol documentation (Markdown, JSON) "
                    "from DDL declaration tree dumps.",
    )

    parser.add_argument(
        "input_files",
        nargs="+",
        help="Tree dump files (JSON, one tree or a list of trees each).",
    )

    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help="Directory to write documentation into (default: %(default)s).",
    )

    parser.add_argument(
        "--formats",
        default=DEFAULT_FORMATS,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: %(default)s.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level for diagnostics on stderr (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    exit_code = run(args)
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
