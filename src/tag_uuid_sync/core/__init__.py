"""UUIDタグ整合のコア処理群.

- 分類（生タグ列 → Single / DOI）
- 計画（状態 → 実行すべき操作）
- 実行（外部ツールによるタグ追加・削除）
"""

from .classify import TagMatch, TagState, classify_tags, clean_uuid, is_valid_uuid, split_tags
from .exceptions import ConfigurationError, ExternalToolError, TagSyncError
from .reconcile import (
    PlanKind,
    ReconcilePlan,
    ReconcileResult,
    TagOperation,
    execute_plan,
    plan_reconciliation,
    reconcile_file,
)

__all__ = [
    # classify
    "TagMatch",
    "TagState",
    "classify_tags",
    "clean_uuid",
    "is_valid_uuid",
    "split_tags",
    # reconcile
    "PlanKind",
    "ReconcilePlan",
    "ReconcileResult",
    "TagOperation",
    "plan_reconciliation",
    "execute_plan",
    "reconcile_file",
    # exceptions
    "TagSyncError",
    "ConfigurationError",
    "ExternalToolError",
]
