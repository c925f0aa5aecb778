"""外部ツール設定の読み込み.

tools.yml 形式:
    tag_command: tag                     # 文字列（shlexで分割）またはリスト
    uuid_command: ["uuid", "-v4"]
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path

import yaml
from loguru import logger

_KNOWN_KEYS = {"tag_command", "uuid_command"}


@dataclass(frozen=True)
class ToolConfig:
    tag_command: tuple[str, ...] = ("tag",)
    uuid_command: tuple[str, ...] = ("uuid",)


def _coerce_command(key: str, value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        parts = shlex.split(value)
    elif isinstance(value, list) and all(isinstance(v, str) for v in value):
        parts = [v for v in value if v.strip()]
    else:
        msg = f"Invalid value for '{key}': expected string or list of strings, got {type(value).__name__}"
        raise ValueError(msg)

    if not parts:
        raise ValueError(f"Empty command for '{key}'")
    return tuple(parts)


def load_tool_config(config_path: Path | str) -> ToolConfig:
    """YAML設定ファイルから ToolConfig を読み込む.

    Args:
        config_path: 設定ファイルのパス

    Returns:
        ToolConfig（ファイルが空なら既定値）

    Raises:
        FileNotFoundError: ファイルが存在しない場合
        ValueError: YAMLとして不正、または内容が不正な場合
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Tool config not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        logger.info(f"Tool config is empty, using defaults: {config_path}")
        return ToolConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Tool config must contain a mapping: {config_path}")

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ValueError(f"Unknown keys in {config_path}: {sorted(map(str, unknown))}. Valid keys: {sorted(_KNOWN_KEYS)}")

    defaults = ToolConfig()
    tag_command = defaults.tag_command
    uuid_command = defaults.uuid_command
    if "tag_command" in data:
        tag_command = _coerce_command("tag_command", data["tag_command"])
    if "uuid_command" in data:
        uuid_command = _coerce_command("uuid_command", data["uuid_command"])

    config = ToolConfig(tag_command=tag_command, uuid_command=uuid_command)
    logger.debug(f"Loaded tool config from {config_path}: {config}")
    return config
