"""
汇总模块

从完整的每日数据中提取关键指标，并生成图表用的采样序列
"""

from typing import Iterable, List, Optional

from ..models.metrics import RETENTION_DAYS
from ..models.results import DailySimulationRow, Drawdown, SimulationSummary


def sample_rows(
    rows: List[DailySimulationRow],
    interval: int = 5,
    milestone_days: Iterable[int] = RETENTION_DAYS,
) -> List[DailySimulationRow]:
    """
    图表采样：每 interval 天一个点，并保留第 1 天和所有里程碑天数
    """
    milestones = set(milestone_days)
    return [
        row for row in rows
        if row.day % interval == 0 or row.day == 1 or row.day in milestones
    ]


def _ltv_at(rows: List[DailySimulationRow], day: int) -> float:
    """读取指定天数的 LTV；模拟天数不足时取最后一天"""
    if not rows:
        return 0.0
    return rows[min(day, len(rows)) - 1].ltv


def summarize(
    rows: List[DailySimulationRow],
    effective_cpi: float,
    payback_day: Optional[int],
) -> SimulationSummary:
    """
    汇总关键指标

    Args:
        rows: 完整每日数据
        effective_cpi: 有效 CPI
        payback_day: 单用户回本日

    Returns:
        SimulationSummary 对象

    Raises:
        ValueError: rows 不是从 Day 1 开始的连续序列
    """
    if rows and (rows[0].day != 1 or rows[-1].day != len(rows)):
        raise ValueError(
            f"汇总需要从 Day 1 开始的完整每日数据，当前为 Day {rows[0].day}..{rows[-1].day}（{len(rows)} 行）"
        )

    # 最大亏损：从 0 开始，只记录严格更低的累计利润
    max_drawdown = Drawdown(day=0, amount=0.0)
    break_even_day: Optional[int] = None

    for row in rows:
        if row.cumulative_profit < max_drawdown.amount:
            max_drawdown = Drawdown(day=row.day, amount=row.cumulative_profit)

        if break_even_day is None and row.cumulative_profit >= 0:
            break_even_day = row.day

    return SimulationSummary(
        effective_cpi=effective_cpi,
        payback_day=payback_day,
        d90_ltv=_ltv_at(rows, 90),
        d365_ltv=_ltv_at(rows, 365),
        max_drawdown=max_drawdown if rows else None,
        break_even_day=break_even_day,
    )


def empty_summary() -> SimulationSummary:
    """数据不足时的占位汇总"""
    return SimulationSummary(effective_cpi=0.0)
