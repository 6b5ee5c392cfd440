"""
AI 诊断提示词

诊断服务本身是外部调用，这里只负责把完整的经济指标序列化进提示词
"""

from ..models.metrics import EconomicMetrics


def build_diagnosis_prompt(metrics: EconomicMetrics, countries: str = "") -> str:
    """
    生成经济模型诊断提示词

    Args:
        metrics: 经济指标
        countries: 目标国家/地区，如 "US, JP"
    """
    return (
        f"Analyze game economics based on these metrics: {metrics.model_dump_json()}. "
        f"Target countries: {countries or 'Global'}. "
        "Provide insights on LTV, ROAS, and payback period."
    )
