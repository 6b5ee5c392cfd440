"""
LTV 计算主流程

留存拟合 -> 有效 CPI -> 回本估算 -> 运营模拟 -> 汇总
"""

import time
import hashlib
import logging
from typing import Optional

from ..models.metrics import EconomicMetrics, EngineConfig
from ..models.results import CalculationResult, RetentionCurve
from .retention import (
    InsufficientDataError,
    fit_retention_curve,
    get_fitted_key_retentions,
    uses_single_point_fallback,
)
from .payback import calc_effective_cpi, estimate_payback
from .operations import simulate
from .summary import sample_rows, summarize, empty_summary

logger = logging.getLogger(__name__)


def _metrics_hash(metrics: EconomicMetrics) -> str:
    return hashlib.md5(metrics.model_dump_json().encode()).hexdigest()[:8]


def run_calculation(
    metrics: EconomicMetrics,
    config: Optional[EngineConfig] = None,
) -> CalculationResult:
    """
    运行 LTV 计算

    数据不足时不抛异常，返回 status="insufficient_data" 的空结果

    Args:
        metrics: 经济指标
        config: 引擎参数，默认 EngineConfig()

    Returns:
        CalculationResult 对象
    """
    start_time = time.time()
    config = config or EngineConfig()
    metrics_hash = _metrics_hash(metrics)

    # 1. 拟合留存曲线
    points = metrics.retention_points()
    try:
        a, b = fit_retention_curve(points, fallback_exponent=config.fallback_exponent)
    except InsufficientDataError as e:
        logger.warning("LTV calculation skipped (%s): %s", metrics_hash, e)
        return CalculationResult(
            status="insufficient_data",
            execution_time_ms=int((time.time() - start_time) * 1000),
            metrics_hash=metrics_hash,
            summary=empty_summary(),
        )

    fallback = uses_single_point_fallback(points)
    logger.debug("Retention curve fitted: A=%.6f B=%.6f fallback=%s", a, b, fallback)

    # 2. 有效 CPI（回本估算与运营模拟共用）
    effective_cpi = calc_effective_cpi(metrics.cpi, metrics.organic_ratio)

    # 3. 单用户回本日
    payback_day = estimate_payback(a, b, metrics.arpdau, effective_cpi, config.horizon_days)

    # 4. 每日运营模拟
    rows = simulate(a, b, metrics, effective_cpi, config.horizon_days)

    # 5. 汇总
    summary = summarize(rows, effective_cpi, payback_day)
    sampled_series = sample_rows(rows, config.sample_interval, config.milestone_days)

    execution_time_ms = int((time.time() - start_time) * 1000)
    logger.info(
        "LTV calculation %s finished in %dms (payback_day=%s, break_even_day=%s)",
        metrics_hash, execution_time_ms, payback_day, summary.break_even_day,
    )

    return CalculationResult(
        status="success",
        execution_time_ms=execution_time_ms,
        metrics_hash=metrics_hash,
        curve=RetentionCurve(
            a=a,
            b=b,
            fallback=fallback,
            fitted_values=get_fitted_key_retentions(a, b, config.milestone_days),
        ),
        rows=rows,
        sampled_series=sampled_series,
        summary=summary,
    )
