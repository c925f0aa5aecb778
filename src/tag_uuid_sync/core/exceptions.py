"""tag-uuid-sync exceptions.

カスタム例外クラスを定義します。
"""

from __future__ import annotations

from collections.abc import Sequence


class TagSyncError(Exception):
    """tag-uuid-sync の致命的エラーの基底クラス."""


class ConfigurationError(TagSyncError):
    """タグ操作を始める前に検出された設定エラー.

    対象ファイル未指定・ファイル不存在・不正な --uuid 指定・不正な設定ファイルなど。
    """


class ExternalToolError(TagSyncError):
    """外部コマンド（tag / uuid）の失敗.

    失敗時点で処理全体を中断します。それまでに成功した操作のロールバックは行いません。

    Attributes:
        command: 実行したコマンドライン
        returncode: 終了コード（コマンドを起動できなかった場合は None）
        stderr: 標準エラー出力
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        stderr: str = "",
        reason: str | None = None,
    ) -> None:
        """例外初期化.

        Args:
            command: 実行したコマンドライン
            returncode: 終了コード
            stderr: 標準エラー出力
            reason: 終了コード以外の失敗理由（起動失敗・出力不正など）
        """
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr
        detail = reason or f"exit status {returncode}"
        message = f"Command failed: {' '.join(self.command)} ({detail})"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)
