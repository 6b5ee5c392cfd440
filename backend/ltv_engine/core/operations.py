"""
每日运营模拟模块

假设从第 1 天起每天获取固定数量的新用户（daily_ua），则第 t 天：

DAU_t = daily_ua × Σ_{k=1}^{t} R(k)
收入_t = DAU_t × ARPDAU
成本_t = daily_ua × eCPI
利润_t = 收入_t - 成本_t
累计利润_t = 累计利润_{t-1} + 利润_t
"""

import math
from typing import List

from ..models.metrics import EconomicMetrics
from ..models.results import DailySimulationRow
from .retention import generate_retention_curve
from .payback import calc_cumulative_ltv


class OperationsSimulator:
    """
    运营模拟器

    维护留存率的滚动累加和，每次 step() 推进一天
    """

    def __init__(
        self,
        a: float,
        b: float,
        metrics: EconomicMetrics,
        effective_cpi: float,
        horizon_days: int = 365,
    ):
        """
        初始化运营模拟器

        Args:
            a, b: 留存曲线参数
            metrics: 经济指标
            effective_cpi: 有效 CPI（与回本估算共用同一个值）
            horizon_days: 模拟天数
        """
        self.metrics = metrics
        self.effective_cpi = effective_cpi
        self.horizon_days = horizon_days

        # 预计算留存率和单用户 LTV
        self._retention = generate_retention_curve(a, b, horizon_days)
        self._ltv = calc_cumulative_ltv(a, b, metrics.arpdau, horizon_days)

        # 固定每日投放成本
        self.daily_cost = metrics.daily_ua * effective_cpi

        self.current_day = 0
        self.retention_sum = 0.0
        self.cumulative_profit = 0.0

    def step(self) -> DailySimulationRow:
        """模拟下一天"""
        if self.current_day >= self.horizon_days:
            raise IndexError(f"已超出模拟天数 {self.horizon_days}")

        index = self.current_day
        self.current_day += 1

        # 1. DAU：所有在期 cohort 的留存之和
        self.retention_sum += float(self._retention[index])
        dau = self.metrics.daily_ua * self.retention_sum

        # 2. 财务指标
        revenue = dau * self.metrics.arpdau
        daily_profit = revenue - self.daily_cost
        self.cumulative_profit += daily_profit

        # 3. 单用户 LTV / ROAS
        ltv = float(self._ltv[index])
        roas = ltv / self.effective_cpi * 100 if self.effective_cpi > 0 else 0.0

        return DailySimulationRow(
            day=self.current_day,
            new_users=self.metrics.daily_ua,
            dau=int(math.floor(dau + 0.5)),
            revenue=revenue,
            cost=self.daily_cost,
            daily_profit=daily_profit,
            cumulative_profit=self.cumulative_profit,
            ltv=ltv,
            roas=roas,
        )

    def run(self) -> List[DailySimulationRow]:
        """从当前天数模拟到结束"""
        return [self.step() for _ in range(self.current_day, self.horizon_days)]


def simulate(
    a: float,
    b: float,
    metrics: EconomicMetrics,
    effective_cpi: float,
    horizon_days: int = 365,
) -> List[DailySimulationRow]:
    """
    模拟完整运营周期（函数式接口）

    Returns:
        Day 1..horizon_days 的每日数据
    """
    return OperationsSimulator(a, b, metrics, effective_cpi, horizon_days).run()
