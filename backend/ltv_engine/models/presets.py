"""
游戏品类预设模板

预设数据保存在同目录的 presets.json 中
"""

import json
from pathlib import Path
from typing import Dict

from .metrics import EconomicMetrics


PRESETS_PATH = Path(__file__).parent / "presets.json"

# 计算器初始表单值
DEFAULT_METRICS = EconomicMetrics(
    cpi=0.80,
    retention_d1=40,
    retention_d7=15,
    retention_d28=5,
    retention_d60=3,
    retention_d90=2,
    retention_d180=1,
    retention_d365=0.5,
    arpdau=0.15,
    organic_ratio=15,
    daily_ua=10000,
)


def load_presets(path: Path = PRESETS_PATH) -> Dict[str, EconomicMetrics]:
    """
    加载预设模板

    Returns:
        {模板名称: EconomicMetrics}
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return {name: EconomicMetrics(**values) for name, values in raw.items()}


def get_preset(name: str) -> EconomicMetrics:
    """按名称获取预设，不存在时抛出 KeyError"""
    presets = load_presets()
    if name not in presets:
        raise KeyError(f"未知的预设模板: {name}")
    return presets[name]
