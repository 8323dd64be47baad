from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from qis_grades.config.loader import ConfigError, load_env_file, resolve_config
from qis_grades.logging.init import log_summary, set_debug, setup_logging
from qis_grades.models.config_models import GradesConfig
from qis_grades.services.classifier import classify_row
from qis_grades.services.orchestrator import ProcessingError, collect_source_files, process_all
from qis_grades.services.summary import render_result_line, render_summary_line, result_to_dict
from qis_grades.source.reader import SourceReadError, read_rows

"""CLI entrypoint.

Flow:
- Load .env, then the config (--config, QIS_GRADES_CONFIG, config/grades.yml or defaults)
- Process the given files/directories, or the configured source_directory
- Log one RESULT line per transcript and a final SUMMARY line (or print JSON)
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="qis-grades",
        description="Credit-weighted grade summary from a saved QIS grade table",
    )
    p.add_argument("paths", nargs="*", type=Path, help="Source files or directories (.html, .htm, .csv, .xlsx)")
    p.add_argument("--config", type=Path, default=None, help="YAML config file")
    p.add_argument(
        "--required-credits",
        type=float,
        default=None,
        help="Credits required by the examination regulations (shown only)",
    )
    p.add_argument("--json", action="store_true", help="Print results as JSON instead of RESULT lines")
    p.add_argument("--inspect-data", action="store_true", help="Print each row's classification then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(cfg: GradesConfig, paths: list[Path]) -> int:
    files = collect_source_files(paths)
    if not files:
        print("inspect: no source files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            rows = read_rows(f, cfg.source)
        except SourceReadError as e:
            print(f"  read_error: {e}")
            continue
        for row in rows:
            cells = [c.strip() for c in row.cells]
            print(f"  {classify_row(row, cfg.schema)} row={row.row_number} cells={len(cells)} {cells}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    load_env_file(Path(".env"))
    try:
        cfg = resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.required_credits is not None:
        cfg = GradesConfig(
            source_directory=cfg.source_directory,
            source=cfg.source,
            schema=cfg.schema,
            required_credits=args.required_credits,
        )

    paths: list[Path] = args.paths or [Path(cfg.source_directory)]
    try:
        if args.inspect_data:
            return _inspect_data(cfg, paths)
        result = process_all(cfg, paths)
    except ProcessingError as e:
        logger.error(str(e))
        return EXIT_FATAL

    if args.json:
        print(json.dumps([result_to_dict(r) for r in result.results], ensure_ascii=False, indent=2))
    else:
        for transcript in result.results:
            logger.info(render_result_line(transcript))
        # log_summary adds the "SUMMARY " prefix
        log_summary(render_summary_line(result.total_files, result)[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
