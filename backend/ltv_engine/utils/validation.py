"""
参数校验工具
"""

from typing import List
from ..models.metrics import EconomicMetrics
from ..models.results import ValidationResult


def validate_metrics(metrics: EconomicMetrics) -> ValidationResult:
    """
    校验经济指标

    Returns:
        ValidationResult 对象
    """
    errors: List[str] = []
    warnings: List[str] = []

    # 1. 校验留存率数据量
    points = metrics.retention_points()
    days = [t for t, _ in points]
    if not points:
        errors.append("至少需要填写一个留存率节点")
    elif len(points) == 1 and days[0] != 1:
        errors.append(f"仅有 Day {days[0]} 留存率无法拟合曲线，请补充次日留存或其他节点")
    elif len(points) == 1:
        warnings.append("仅有次日留存，将使用假设衰减指数估算留存曲线")

    # 2. 校验留存率单调性
    for (day, value), (next_day, next_value) in zip(points, points[1:]):
        if next_value >= value:
            warnings.append(f"Day {next_day} 留存率不低于 Day {day}，这通常不正常")

    # 3. 校验收入与成本
    if metrics.arpdau <= 0:
        warnings.append("ARPDAU 为 0，将不会产生任何收入")
    if metrics.cpi <= 0:
        warnings.append("CPI 为 0，回本日将为第 1 天")
    if metrics.organic_ratio >= 100:
        warnings.append("自然量占比为 100%，有效 CPI 为 0")

    # 4. 校验买量规模
    if metrics.daily_ua <= 0:
        warnings.append("每日新增为 0，运营模拟中 DAU 与收入均为 0")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )
