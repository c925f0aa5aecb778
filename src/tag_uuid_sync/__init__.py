"""tag-uuid-sync: ファイルの Single UUID タグと uuid:<UUID> タグを揃えるツール."""

from tag_uuid_sync.config import ToolConfig, load_tool_config
from tag_uuid_sync.core import (
    ConfigurationError,
    ExternalToolError,
    PlanKind,
    ReconcilePlan,
    TagState,
    TagSyncError,
    classify_tags,
    clean_uuid,
    plan_reconciliation,
    reconcile_file,
)
from tag_uuid_sync.runner import CommandResult, TagTool, run_command

__version__ = "0.1.0"

__all__ = [
    "ToolConfig",
    "load_tool_config",
    "TagState",
    "classify_tags",
    "clean_uuid",
    "PlanKind",
    "ReconcilePlan",
    "plan_reconciliation",
    "reconcile_file",
    "TagSyncError",
    "ConfigurationError",
    "ExternalToolError",
    "CommandResult",
    "TagTool",
    "run_command",
]
