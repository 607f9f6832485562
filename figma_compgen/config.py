"""設定檔載入與基本驗證."""

import json
import os
from pathlib import Path
from typing import Any, Optional

DEFAULT_CONFIG_PATH = "figma-compgen.config.json"
DEFAULT_SNAPSHOT_DIR = ".figma-compgen"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "selection", "export", "watch"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "fileKey"},
    "selection": {"nodeIds"},
    "export": {"snapshotDir"},
    "watch": {"debounceSeconds"},
}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    # selection.nodeIds 應為字串陣列
    node_ids = _section(cfg, "selection").get("nodeIds")
    if node_ids is not None and (
        not isinstance(node_ids, list) or not all(isinstance(n, str) for n in node_ids)
    ):
        _warn("selection.nodeIds 應為字串陣列")

    # watch.debounceSeconds 值類型
    debounce = _section(cfg, "watch").get("debounceSeconds")
    if debounce is not None and (not isinstance(debounce, (int, float)) or debounce < 0):
        _warn(f"watch.debounceSeconds 應為非負數字，目前是 {debounce!r}")


def _section(cfg: dict, name: str) -> dict:
    section = cfg.get(name, {})
    return section if isinstance(section, dict) else {}


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def figma_token(cfg: dict) -> Optional[str]:
    return _section(cfg, "figma").get("personalAccessToken") or os.environ.get("FIGMA_TOKEN")


def snapshot_dir(cfg: dict) -> str:
    return _section(cfg, "export").get("snapshotDir") or DEFAULT_SNAPSHOT_DIR


def selection_ids(cfg: dict) -> list:
    node_ids = _section(cfg, "selection").get("nodeIds") or []
    return [n for n in node_ids if isinstance(n, str)]


def debounce_seconds(cfg: dict) -> float:
    value = _section(cfg, "watch").get("debounceSeconds")
    return float(value) if isinstance(value, (int, float)) and value >= 0 else 1.0
