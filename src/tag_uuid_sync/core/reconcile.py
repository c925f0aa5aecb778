"""Single / DOI タグの整合処理.

TagState から「何をすべきか」を決める純粋関数（plan_reconciliation）と、
決まった操作を外部ツールで実行する executor（execute_plan）を分けています。

状態遷移:
    - どちらも無い: 明示UUIDがあれば Single のみ追加、無ければ生成して両方追加
    - 両方あり一致: 何もしない
    - Single のみ: DOI を追加
    - DOI のみ: Single を追加
    - 両方あり不一致: Single を削除し、DOI の値で Single を追加し直す（DOI優先）
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from tag_uuid_sync.core.classify import TagState, classify_tags, doi_tag

if TYPE_CHECKING:
    from tag_uuid_sync.runner import TagTool


class PlanKind(str, Enum):
    """整合処理の種類."""

    NO_ACTION = "no_action"
    ADD_SINGLE = "add_single"
    ADD_DOI = "add_doi"
    ADD_BOTH = "add_both"
    REMOVE_THEN_ADD = "remove_then_add"
    GENERATE_AND_ADD_BOTH = "generate_and_add_both"


@dataclass(frozen=True)
class TagOperation:
    action: str  # "add" | "remove"
    tag: str


@dataclass(frozen=True)
class ReconcilePlan:
    """整合処理の計画.

    Attributes:
        kind: 処理の種類
        uuid: 追加に使うUUID（GENERATE_AND_ADD_BOTH では生成前なので None）
        stale_tag: REMOVE_THEN_ADD で削除する Single タグ（付与されている表記そのまま）
    """

    kind: PlanKind
    uuid: str | None = None
    stale_tag: str | None = None

    @property
    def is_mutating(self) -> bool:
        return self.kind is not PlanKind.NO_ACTION

    def with_uuid(self, value: str) -> ReconcilePlan:
        """生成したUUIDを埋めて ADD_BOTH に確定させる."""
        if self.kind is not PlanKind.GENERATE_AND_ADD_BOTH:
            raise ValueError(f"Plan {self.kind.value} does not take a generated UUID")
        return replace(self, kind=PlanKind.ADD_BOTH, uuid=value)

    def operations(self) -> list[TagOperation]:
        """実行順に並んだタグ操作の一覧."""
        if self.kind is PlanKind.NO_ACTION:
            return []
        if self.kind is PlanKind.GENERATE_AND_ADD_BOTH:
            raise ValueError("UUID has not been generated yet; call with_uuid() first")
        if self.uuid is None:
            raise ValueError(f"Plan {self.kind.value} has no UUID")

        if self.kind is PlanKind.ADD_SINGLE:
            return [TagOperation("add", self.uuid)]
        if self.kind is PlanKind.ADD_DOI:
            return [TagOperation("add", doi_tag(self.uuid))]
        if self.kind is PlanKind.ADD_BOTH:
            return [TagOperation("add", self.uuid), TagOperation("add", doi_tag(self.uuid))]
        if self.kind is PlanKind.REMOVE_THEN_ADD:
            if self.stale_tag is None:
                raise ValueError("REMOVE_THEN_ADD requires stale_tag")
            return [TagOperation("remove", self.stale_tag), TagOperation("add", self.uuid)]
        raise ValueError(f"Unknown plan kind: {self.kind}")


@dataclass(frozen=True)
class ReconcileResult:
    path: Path
    plan: ReconcilePlan
    applied: tuple[TagOperation, ...]
    dry_run: bool = False


def plan_reconciliation(state: TagState, explicit_uuid: str | None = None) -> ReconcilePlan:
    """TagState から整合処理の計画を立てる.

    Args:
        state: classify_tags() の戻り値
        explicit_uuid: 呼び出し側が指定したUUID（タグが1つも無い場合のみ使う）

    Returns:
        整合処理の計画
    """
    single, doi = state.single, state.doi

    if single is None and doi is None:
        if explicit_uuid:
            # 明示UUIDは Single のみ付与する（DOI は次回実行時に補完される）
            return ReconcilePlan(PlanKind.ADD_SINGLE, uuid=explicit_uuid)
        return ReconcilePlan(PlanKind.GENERATE_AND_ADD_BOTH)

    if explicit_uuid:
        logger.info(f"Ignoring explicit UUID {explicit_uuid}: file already carries a UUID tag")

    if single is not None and doi is not None:
        if state.is_consistent:
            return ReconcilePlan(PlanKind.NO_ACTION, uuid=single.uuid)
        return ReconcilePlan(PlanKind.REMOVE_THEN_ADD, uuid=doi.uuid, stale_tag=single.raw)

    if single is not None:
        return ReconcilePlan(PlanKind.ADD_DOI, uuid=single.uuid)
    if doi is not None:
        return ReconcilePlan(PlanKind.ADD_SINGLE, uuid=doi.uuid)
    raise ValueError("Unreachable tag state")


def execute_plan(plan: ReconcilePlan, path: Path, tool: TagTool, dry_run: bool = False) -> ReconcileResult:
    """計画に沿ってタグ操作を実行する.

    失敗した時点で ExternalToolError が送出され、以降の操作は行わない。
    dry_run の場合は操作内容をログに出すだけでファイルには触れない
    （UUID生成はファイルを変更しないため dry_run でも行う）。
    """
    if plan.kind is PlanKind.GENERATE_AND_ADD_BOTH:
        generated = tool.generate_uuid()
        logger.info(f"Generated new UUID {generated}")
        plan = plan.with_uuid(generated)

    applied: list[TagOperation] = []
    for op in plan.operations():
        if dry_run:
            logger.info(f"[dry-run] would {op.action} tag {op.tag!r} on {path}")
            continue
        if op.action == "add":
            tool.add_tag(op.tag, path)
        elif op.action == "remove":
            tool.remove_tag(op.tag, path)
        else:
            raise ValueError(f"Unknown tag operation: {op.action}")
        logger.info(f"{op.action.capitalize()} tag {op.tag!r} on {path}")
        applied.append(op)

    return ReconcileResult(path=path, plan=plan, applied=tuple(applied), dry_run=dry_run)


def reconcile_file(
    path: Path,
    tool: TagTool,
    explicit_uuid: str | None = None,
    dry_run: bool = False,
) -> ReconcileResult:
    """ファイル1つについて、読み取り → 分類 → 計画 → 実行 を行う."""
    tags = tool.read_tags(path)
    logger.debug(f"Found {len(tags)} tag(s) on {path}: {tags}")

    state = classify_tags(tags)
    plan = plan_reconciliation(state, explicit_uuid=explicit_uuid)
    logger.info(f"Plan for {path}: {plan.kind.value}")

    result = execute_plan(plan, path, tool, dry_run=dry_run)
    if not result.plan.is_mutating:
        logger.info(f"Tags already consistent on {path} ({result.plan.uuid})")
    return result
