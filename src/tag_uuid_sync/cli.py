"""tag-uuid-sync コマンドライン."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from tag_uuid_sync.config import ToolConfig, load_tool_config
from tag_uuid_sync.core.classify import clean_uuid, is_valid_uuid
from tag_uuid_sync.core.exceptions import ConfigurationError, TagSyncError
from tag_uuid_sync.core.reconcile import reconcile_file
from tag_uuid_sync.runner import TagTool

_LOG_LEVELS = ("WARNING", "INFO", "DEBUG")


def configure_logging(verbosity: int) -> None:
    """-v の回数に応じてログレベルを設定する（0: WARNING, 1: INFO, 2以上: DEBUG）."""
    level = _LOG_LEVELS[min(max(verbosity, 0), len(_LOG_LEVELS) - 1)]
    logger.remove()
    logger.add(sys.stderr, level=level)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tag-uuid-sync",
        description="Keep a file's bare UUID tag and its uuid:<UUID> tag present and equal.",
    )
    p.add_argument("-u", "--uuid", default=None, help="UUID to tag an untagged file with (single tag only)")
    p.add_argument("-f", "--file", default=None, help="Target file")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (repeatable)")
    p.add_argument("--config", type=Path, default=None, help="YAML file overriding the tag/uuid commands")
    p.add_argument("--dry-run", action="store_true", help="Log planned tag changes without applying them")
    p.add_argument("path", nargs="?", default=None, help="Target file (used when --file is absent)")
    return p


def _resolve_file(args: argparse.Namespace) -> Path:
    # 空文字の -f は Path(".") になるため、文字列のまま判定する
    raw = args.file if args.file is not None else args.path
    if raw is None or not raw.strip():
        raise ConfigurationError("No file given (use --file or a positional path)")
    path = Path(raw)
    if not path.exists():
        raise ConfigurationError(f"File not found: {path}")
    if not path.is_file():
        raise ConfigurationError(f"Not a regular file: {path}")
    return path


def _resolve_uuid(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = clean_uuid(value)
    if not is_valid_uuid(cleaned):
        raise ConfigurationError(f"Invalid --uuid value: {value!r}")
    return cleaned


def _load_config(path: Path | None) -> ToolConfig:
    if path is None:
        return ToolConfig()
    try:
        return load_tool_config(path)
    except (FileNotFoundError, ValueError) as e:
        raise ConfigurationError(str(e)) from e


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        path = _resolve_file(args)
        explicit_uuid = _resolve_uuid(args.uuid)
        tool = TagTool(_load_config(args.config))
        result = reconcile_file(path, tool, explicit_uuid=explicit_uuid, dry_run=args.dry_run)
    except TagSyncError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Done: {result.path} ({result.plan.kind.value}, {len(result.applied)} change(s))")
    return 0


if __name__ == "__main__":
    sys.exit(main())
