"""
API 输入模型

EconomicMetrics: 单次计算的经济指标输入（不可变）
EngineConfig: 引擎可调参数（模拟天数、采样间隔、单点回退指数等）
"""

from typing import List, Tuple
from pydantic import BaseModel, ConfigDict, Field


# 留存率节点对应的天数
RETENTION_DAYS = (1, 7, 28, 60, 90, 180, 365)


class EconomicMetrics(BaseModel):
    """经济指标 - 留存率为百分比（0-100）"""
    model_config = ConfigDict(frozen=True)

    cpi: float = Field(ge=0, default=0.80, description="CPI（混合单次安装成本，未扣除自然量）")
    retention_d1: float = Field(ge=0, le=100, default=0, description="次日留存率 (%)")
    retention_d7: float = Field(ge=0, le=100, default=0, description="7日留存率 (%)")
    retention_d28: float = Field(ge=0, le=100, default=0, description="28日留存率 (%)")
    retention_d60: float = Field(ge=0, le=100, default=0, description="60日留存率 (%)")
    retention_d90: float = Field(ge=0, le=100, default=0, description="90日留存率 (%)")
    retention_d180: float = Field(ge=0, le=100, default=0, description="180日留存率 (%)")
    retention_d365: float = Field(ge=0, le=100, default=0, description="365日留存率 (%)")
    arpdau: float = Field(ge=0, default=0.15, description="ARPDAU（日活跃用户平均收入）")
    organic_ratio: float = Field(ge=0, le=100, default=15, description="自然量占比 (%)")
    daily_ua: int = Field(ge=0, default=10000, description="每日新增用户数（付费 + 自然）")

    def retention_dict(self) -> dict:
        """返回留存率字典 {day: retention(%)}"""
        return {
            1: self.retention_d1,
            7: self.retention_d7,
            28: self.retention_d28,
            60: self.retention_d60,
            90: self.retention_d90,
            180: self.retention_d180,
            365: self.retention_d365,
        }

    def retention_points(self) -> List[Tuple[int, float]]:
        """
        返回参与拟合的留存点 [(t, r)]

        r 转换为 0-1 的小数，只保留 r > 0 的节点
        """
        return [(day, value / 100) for day, value in self.retention_dict().items() if value > 0]


class EngineConfig(BaseModel):
    """引擎参数"""
    horizon_days: int = Field(ge=1, le=3650, default=365, description="模拟天数")
    sample_interval: int = Field(ge=1, default=5, description="图表采样间隔（天）")
    milestone_days: Tuple[int, ...] = Field(default=RETENTION_DAYS, description="图表必须包含的里程碑天数")
    fallback_exponent: float = Field(
        lt=0,
        default=-0.5,
        description="仅有次日留存时使用的假设衰减指数 B",
    )
