"""
FastAPI 路由定义
"""

import io
import csv
import logging
from typing import Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse

from ..models.metrics import EconomicMetrics, EngineConfig
from ..models.results import CalculationResult, ValidationResult
from ..models.presets import DEFAULT_METRICS, load_presets, get_preset
from ..core.calculator import run_calculation
from ..utils.validation import validate_metrics
from ..utils.diagnosis import build_diagnosis_prompt

logger = logging.getLogger(__name__)

router = APIRouter()


def _engine_config(
    horizon_days: Optional[int] = Query(default=None, ge=1, le=3650, description="模拟天数"),
    fallback_exponent: Optional[float] = Query(default=None, lt=0, description="单点回退衰减指数"),
) -> EngineConfig:
    """从查询参数构造引擎参数，未提供的字段使用默认值"""
    overrides = {"horizon_days": horizon_days, "fallback_exponent": fallback_exponent}
    return EngineConfig(**{key: value for key, value in overrides.items() if value is not None})


@router.post("/calculate", response_model=CalculationResult)
async def calculate(
    metrics: EconomicMetrics,
    config: EngineConfig = Depends(_engine_config),
) -> CalculationResult:
    """
    运行 LTV & 回本计算

    Args:
        metrics: 经济指标
        config: 引擎参数（查询参数 horizon_days / fallback_exponent）

    Returns:
        CalculationResult 对象
    """
    try:
        # 先校验输入
        validation = validate_metrics(metrics)
        if not validation.valid:
            raise HTTPException(
                status_code=400,
                detail={
                    "message": "参数校验失败",
                    "errors": validation.errors,
                    "warnings": validation.warnings,
                }
            )

        return run_calculation(metrics, config)

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("LTV calculation failed")
        raise HTTPException(
            status_code=500,
            detail={"message": f"计算失败: {str(e)}"}
        )


@router.post("/validate", response_model=ValidationResult)
async def validate(metrics: EconomicMetrics) -> ValidationResult:
    """
    校验经济指标

    仅校验输入有效性，不执行计算
    """
    return validate_metrics(metrics)


@router.post("/export")
async def export_data(
    metrics: EconomicMetrics,
    format: str = Query(default="csv", pattern="^(csv|json)$"),
    config: EngineConfig = Depends(_engine_config),
):
    """
    导出每日运营数据

    Args:
        metrics: 经济指标
        format: 导出格式 (csv/json)
        config: 引擎参数（查询参数 horizon_days / fallback_exponent）

    Returns:
        文件下载
    """
    try:
        result = run_calculation(metrics, config)

        if format == "json":
            return result.model_dump()

        output = io.StringIO()
        writer = csv.writer(output)

        # 写入表头
        writer.writerow([
            "Day", "New_Users", "DAU", "Revenue", "Cost",
            "Daily_Profit", "Cumulative_Profit", "LTV", "ROAS"
        ])

        # 写入数据
        for row in result.rows:
            writer.writerow([
                row.day,
                row.new_users,
                row.dau,
                round(row.revenue, 2),
                round(row.cost, 2),
                round(row.daily_profit, 2),
                round(row.cumulative_profit, 2),
                round(row.ltv, 4),
                round(row.roas, 1),
            ])

        output.seek(0)
        return StreamingResponse(
            iter([output.getvalue()]),
            media_type="text/csv",
            headers={
                "Content-Disposition": "attachment; filename=ltv_daily_operations.csv"
            }
        )

    except Exception as e:
        logger.exception("Export failed")
        raise HTTPException(
            status_code=500,
            detail={"message": f"导出失败: {str(e)}"}
        )


@router.get("/default-metrics", response_model=EconomicMetrics)
async def get_default_metrics() -> EconomicMetrics:
    """获取计算器默认输入"""
    return DEFAULT_METRICS


@router.get("/presets", response_model=Dict[str, EconomicMetrics])
async def get_presets() -> Dict[str, EconomicMetrics]:
    """获取全部品类预设模板"""
    return load_presets()


@router.get("/presets/{name}", response_model=EconomicMetrics)
async def get_preset_by_name(name: str) -> EconomicMetrics:
    """按名称获取预设模板"""
    try:
        return get_preset(name)
    except KeyError:
        raise HTTPException(
            status_code=404,
            detail={"message": f"未知的预设模板: {name}"}
        )


@router.post("/diagnosis-prompt")
async def diagnosis_prompt(
    metrics: EconomicMetrics,
    countries: str = Query(default=""),
):
    """
    生成 AI 诊断提示词

    诊断服务由外部调用，这里只返回序列化后的提示词
    """
    return {"prompt": build_diagnosis_prompt(metrics, countries)}
