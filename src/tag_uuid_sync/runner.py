"""外部コマンド（tag / uuid）のラッパー.

各呼び出しは共有状態に書き込まず、CommandResult を返します。
タイムアウトは設けません（外部プロセスが止まればツールも止まる）。
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from tag_uuid_sync.config import ToolConfig
from tag_uuid_sync.core.classify import is_valid_uuid, split_tags
from tag_uuid_sync.core.exceptions import ExternalToolError


@dataclass(frozen=True)
class CommandResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def run_command(args: Sequence[str]) -> CommandResult:
    """コマンドを実行し、終了コードと出力を返す.

    Raises:
        ExternalToolError: コマンドを起動できなかった場合
    """
    logger.debug(f"Running: {' '.join(args)}")
    try:
        proc = subprocess.run(list(args), capture_output=True, encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        raise ExternalToolError(args, None, reason=str(e)) from e

    result = CommandResult(
        args=tuple(args),
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
    logger.debug(f"Exit {result.returncode}: stdout={result.stdout.strip()!r} stderr={result.stderr.strip()!r}")
    return result


class TagTool:
    """tag / uuid コマンドによるタグ読み書きとUUID生成."""

    def __init__(self, config: ToolConfig | None = None) -> None:
        self.config = config or ToolConfig()

    def read_tags(self, path: Path) -> list[str]:
        """ファイルに付与されたタグを返す.

        読み取りに失敗した場合はエラーにせず、タグ無しとして扱う。
        """
        result = run_command([*self.config.tag_command, "--no-name", "--list", str(path)])
        if not result.ok:
            logger.debug(f"Tag read failed for {path} (exit {result.returncode}); treating as untagged")
            return []
        return split_tags(result.stdout)

    def add_tag(self, tag: str, path: Path) -> CommandResult:
        return self._mutate("--add", tag, path)

    def remove_tag(self, tag: str, path: Path) -> CommandResult:
        return self._mutate("--remove", tag, path)

    def _mutate(self, flag: str, tag: str, path: Path) -> CommandResult:
        result = run_command([*self.config.tag_command, flag, tag, str(path)])
        if not result.ok:
            raise ExternalToolError(result.args, result.returncode, result.stderr)
        return result

    def generate_uuid(self) -> str:
        """新しいUUIDを生成する（小文字の正規形）.

        Raises:
            ExternalToolError: 終了コードが非0、または出力がUUIDでない場合
        """
        result = run_command(self.config.uuid_command)
        if not result.ok:
            raise ExternalToolError(result.args, result.returncode, result.stderr)

        lines = result.stdout.strip().splitlines()
        value = lines[0].strip().lower() if lines else ""
        if not is_valid_uuid(value):
            raise ExternalToolError(result.args, result.returncode, reason=f"unexpected output {value!r}")
        return value
