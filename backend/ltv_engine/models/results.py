"""
API 输出结果模型
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class RetentionCurve(BaseModel):
    """留存率曲线 R(t) = A * t^B"""
    a: float = Field(description="幂函数参数 A")
    b: float = Field(description="幂函数参数 B")
    fallback: bool = Field(default=False, description="是否使用单点回退（仅次日留存）")
    fitted_values: Dict[str, float] = Field(description="拟合后的关键节点留存率")


class DailySimulationRow(BaseModel):
    """每日运营数据"""
    day: int
    new_users: int
    dau: int
    revenue: float
    cost: float
    daily_profit: float
    cumulative_profit: float
    ltv: float = Field(description="单用户截至当日的累计 LTV")
    roas: float = Field(description="LTV / eCPI（%）")


class Drawdown(BaseModel):
    """最大亏损（累计利润最低点）"""
    day: int = Field(description="出现最低点的天数（0 表示从未亏损）")
    amount: float = Field(description="累计利润最低值")


class SimulationSummary(BaseModel):
    """汇总指标"""
    effective_cpi: float = Field(description="有效 CPI（扣除自然量后的混合成本）")
    payback_day: Optional[int] = Field(default=None, description="单用户回本日，None 表示 365 天内无法回本")
    d90_ltv: float = Field(default=0.0, description="D90 LTV")
    d365_ltv: float = Field(default=0.0, description="D365 LTV")
    max_drawdown: Optional[Drawdown] = Field(default=None, description="最大资金占用")
    break_even_day: Optional[int] = Field(default=None, description="累计盈亏平衡日")


class CalculationResult(BaseModel):
    """计算结果 - API 输出主结构"""
    status: str = Field(default="success", description="状态: success / insufficient_data")
    execution_time_ms: int = Field(description="执行时间（毫秒）")
    metrics_hash: Optional[str] = Field(default=None, description="输入哈希值")

    curve: Optional[RetentionCurve] = Field(default=None, description="留存率曲线")
    rows: List[DailySimulationRow] = Field(default_factory=list, description="完整每日数据")
    sampled_series: List[DailySimulationRow] = Field(default_factory=list, description="图表采样数据")
    summary: SimulationSummary = Field(description="汇总信息")


class ValidationResult(BaseModel):
    """参数校验结果"""
    valid: bool = Field(description="是否有效")
    errors: List[str] = Field(default_factory=list, description="错误列表")
    warnings: List[str] = Field(default_factory=list, description="警告列表")
