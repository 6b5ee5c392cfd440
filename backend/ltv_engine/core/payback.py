"""
LTV 与回本估算模块

单用户 LTV：
LTV(t) = Σ_{k=1}^{t} R(k) × ARPDAU

回本日：LTV(t) >= eCPI 的第一天
"""

from typing import Optional
import numpy as np

from .retention import generate_retention_curve


def calc_effective_cpi(cpi: float, organic_ratio: float) -> float:
    """
    计算有效 CPI（混合成本）

    eCPI = CPI × (1 - 自然量占比)

    Args:
        cpi: 付费 CPI
        organic_ratio: 自然量占比（0-100）
    """
    return cpi * (1 - organic_ratio / 100)


def calc_cumulative_ltv(a: float, b: float, arpdau: float, max_day: int = 365) -> np.ndarray:
    """
    计算单用户 Day 1..max_day 的累计 LTV

    Returns:
        数组，下标 i 对应第 i + 1 天的 LTV
    """
    return np.cumsum(generate_retention_curve(a, b, max_day) * arpdau)


def estimate_payback(
    a: float,
    b: float,
    arpdau: float,
    effective_cpi: float,
    max_day: int = 365,
) -> Optional[int]:
    """
    估算单用户回本日

    Returns:
        首个累计收入 >= eCPI 的天数；max_day 内无法回本时返回 None
    """
    ltv = calc_cumulative_ltv(a, b, arpdau, max_day)
    reached = np.nonzero(ltv >= effective_cpi)[0]
    if len(reached) == 0:
        return None
    return int(reached[0]) + 1
