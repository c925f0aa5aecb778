"""UUIDタグの分類（生タグ列 → Single / DOI）.

ファイルに付与されたタグ列から、2種類のUUIDタグを抽出します。

- Single タグ: 素のUUID（例: `0f8fad5b-d9cb-469f-a165-70867728950e`）
- DOI タグ: `uuid:` プレフィックス付きのUUID（例: `uuid:0f8fad5b-...`）

設計方針:
    - 各種別とも、元の並び順で最初にマッチしたタグを正とする（以降のマッチは無視し、警告のみ）
    - マッチした値は clean_uuid で整形した後、UUIDとして妥当かを再検証する
    - 再検証に失敗したタグはスキップし、次の候補を探す
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

_UUID = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
_UUID_FULL = re.compile(rf"^{_UUID}$", re.IGNORECASE)
_DOI_TAG = re.compile(rf"^uuid:\s*({_UUID}\S*)$", re.IGNORECASE)
_SINGLE_TAG = re.compile(rf"^({_UUID}\S*)$", re.IGNORECASE)
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9,-]")

DOI_PREFIX = "uuid:"


@dataclass(frozen=True)
class TagMatch:
    """UUIDタグとして採用されたタグ.

    raw は削除時に使うため、付与されている表記そのままを保持する。
    """

    raw: str
    uuid: str


@dataclass(frozen=True)
class TagState:
    single: TagMatch | None = None
    doi: TagMatch | None = None
    duplicates: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.single is None and self.doi is None

    @property
    def is_consistent(self) -> bool:
        """Single と DOI が両方あり、値が一致しているか（大文字小文字は無視）."""
        if self.single is None or self.doi is None:
            return False
        return self.single.uuid.lower() == self.doi.uuid.lower()


def clean_uuid(text: str) -> str:
    """英数字・カンマ・ハイフン以外の文字を取り除く.

    Examples:
        >>> clean_uuid("12345678-90ab-cdef-1234-567890abcdef!!")
        '12345678-90ab-cdef-1234-567890abcdef'
        >>> clean_uuid("uuid:12345678-90ab-cdef-1234-567890abcdef")
        'uuid12345678-90ab-cdef-1234-567890abcdef'
    """
    return _UNSAFE_CHARS.sub("", text)


def is_valid_uuid(text: str) -> bool:
    """正規形のUUID（大文字小文字は問わない）かどうか."""
    return bool(_UUID_FULL.match(text))


def doi_tag(value: str) -> str:
    """UUIDから DOI タグ文字列を作る."""
    return f"{DOI_PREFIX}{value}"


def split_tags(raw: str) -> list[str]:
    """tag コマンドのカンマ区切り出力をタグのリストに分解する."""
    out: list[str] = []
    for piece in raw.split(","):
        s = piece.strip()
        if s:
            out.append(s)
    return out


def _first_match(tags: list[str], pattern: re.Pattern[str], kind: str) -> tuple[TagMatch | None, list[str]]:
    match: TagMatch | None = None
    duplicates: list[str] = []
    for tag in tags:
        m = pattern.match(tag.strip())
        if not m:
            continue
        if match is not None:
            duplicates.append(tag)
            continue
        value = clean_uuid(m.group(1))
        if not is_valid_uuid(value):
            logger.warning(f"Skipping malformed {kind} tag: {tag!r} (cleaned to {value!r})")
            continue
        match = TagMatch(raw=tag, uuid=value)
    return match, duplicates


def classify_tags(tags: Iterable[str]) -> TagState:
    """タグ列から Single / DOI タグを抽出する.

    Args:
        tags: ファイルに付与されているタグ（元の並び順）

    Returns:
        抽出結果。どちらも見つからない場合は空の TagState
    """
    tag_list = list(tags)
    doi, doi_duplicates = _first_match(tag_list, _DOI_TAG, "DOI")
    single, single_duplicates = _first_match(tag_list, _SINGLE_TAG, "single")

    duplicates = tuple(doi_duplicates + single_duplicates)
    if duplicates:
        # 先頭マッチのみを正とし、重複は削除しない
        logger.warning(f"Ignoring {len(duplicates)} duplicate UUID tag(s): {', '.join(duplicates)}")

    return TagState(single=single, doi=doi, duplicates=duplicates)
