"""
留存率拟合模块

拟合逻辑：
幂函数 R(t) = A * t^B，在 log-log 空间做最小二乘线性回归：
    ln R = ln A + B * ln t

数据不足时的处理：
1. 至少 2 个不同天数的留存点：正常回归
2. 只有次日留存（t = 1）：A = R1, B = 假设衰减指数（默认 -0.5）
3. 其他情况：抛出 InsufficientDataError
"""

import math
from typing import Dict, Iterable, List, Sequence, Tuple
import numpy as np
from scipy.stats import linregress


DEFAULT_FALLBACK_EXPONENT = -0.5


class InsufficientDataError(ValueError):
    """有效留存点不足，无法得到留存曲线"""


def _valid_points(points: Sequence[Tuple[int, float]]) -> List[Tuple[int, float]]:
    return [(int(t), float(r)) for t, r in points if r > 0 and t > 0]


def uses_single_point_fallback(points: Sequence[Tuple[int, float]]) -> bool:
    """有效点只覆盖 Day 1 时使用单点回退"""
    return {t for t, _ in _valid_points(points)} == {1}


def fit_retention_curve(
    points: Sequence[Tuple[int, float]],
    fallback_exponent: float = DEFAULT_FALLBACK_EXPONENT,
) -> Tuple[float, float]:
    """
    根据留存点拟合幂函数参数

    Args:
        points: [(t, r)]，t 为天数，r 为 0-1 的留存率；r <= 0 的点会被忽略
        fallback_exponent: 仅有次日留存时使用的衰减指数

    Returns:
        (A, B): 拟合参数

    Raises:
        InsufficientDataError: 有效点不足或回归结果非有限值
    """
    valid = _valid_points(points)
    distinct_days = {t for t, _ in valid}

    if len(distinct_days) >= 2:
        x = np.log([t for t, _ in valid])
        y = np.log([r for _, r in valid])
        fit = linregress(x, y)
        a, b = math.exp(fit.intercept), float(fit.slope)
    elif uses_single_point_fallback(valid):
        # 单点回退：该指数并非由数据拟合得到
        a = float(np.mean([r for _, r in valid]))
        b = fallback_exponent
    else:
        raise InsufficientDataError(
            f"有效留存点不足（{len(valid)} 个，{len(distinct_days)} 个不同天数），无法拟合留存曲线"
        )

    if not (math.isfinite(a) and math.isfinite(b)):
        raise InsufficientDataError(f"留存曲线拟合结果无效: A={a}, B={b}")

    return a, b


def calc_retention(day: int, a: float, b: float) -> float:
    """
    计算获客后第 day 天的留存率 R(day) = A * day^B

    Args:
        day: 获客后天数（>= 1）
        a, b: 由 fit_retention_curve() 拟合得到的参数
    """
    return float(a * np.power(float(day), b))


def generate_retention_curve(a: float, b: float, max_day: int = 365) -> np.ndarray:
    """
    生成 Day 1..max_day 的留存率数组

    下标 i 对应第 i + 1 天
    """
    days = np.arange(1, max_day + 1, dtype=float)
    return a * np.power(days, b)


def get_fitted_key_retentions(
    a: float, b: float, days: Iterable[int] = (1, 7, 28, 60, 90, 180, 365)
) -> Dict[str, float]:
    """获取关键节点的拟合留存率值，如 {"day1": 0.41, "day7": 0.19}"""
    return {f"day{day}": calc_retention(day, a, b) for day in days}

