"""
基础示例脚本

演示如何使用 LTV 引擎进行计算
"""

import sys
from pathlib import Path

# 添加项目路径
sys.path.insert(0, str(Path(__file__).parent.parent))

from ltv_engine.models.presets import get_preset
from ltv_engine.core.calculator import run_calculation
from ltv_engine.utils.validation import validate_metrics


def main():
    # 1. 加载预设模板
    metrics = get_preset("2677美国")
    print("=" * 60)
    print("LTV & 回本估算示例")
    print("=" * 60)

    # 2. 校验输入
    print("\n[1] 参数校验...")
    validation = validate_metrics(metrics)
    print(f"    有效: {validation.valid}")
    if validation.warnings:
        print(f"    警告: {validation.warnings}")
    if validation.errors:
        print(f"    错误: {validation.errors}")
        return

    # 3. 运行计算
    print("\n[2] 运行计算...")
    result = run_calculation(metrics)
    if result.status != "success":
        print("    留存数据不足，无法计算")
        return

    # 4. 输出结果
    print(f"\n[3] 计算结果 (耗时 {result.execution_time_ms}ms)")
    print("-" * 60)

    curve = result.curve
    summary = result.summary

    print(f"\n📈 留存曲线 R(t) = A × t^B:")
    print(f"    A: {curve.a:.4f}")
    print(f"    B: {curve.b:.4f}")
    print(f"    拟合 Day7: {curve.fitted_values.get('day7', 0)*100:.1f}%")
    print(f"    拟合 Day90: {curve.fitted_values.get('day90', 0)*100:.1f}%")

    print(f"\n💰 单用户经济:")
    print(f"    有效 CPI: ${summary.effective_cpi:.2f}")
    print(f"    D90 LTV: ${summary.d90_ltv:.3f}")
    print(f"    D365 LTV: ${summary.d365_ltv:.3f}")
    print(f"    回本日: {'Day ' + str(summary.payback_day) if summary.payback_day else '> 365 天'}")

    print(f"\n🏆 运营现金流:")
    drawdown = summary.max_drawdown
    print(f"    最大资金占用: ${drawdown.amount:,.0f} (Day {drawdown.day})")
    print(f"    累计盈亏平衡日: Day {summary.break_even_day or 'N/A'}")
    print(f"    Day 365 DAU: {result.rows[-1].dau:,}")

    print("\n" + "=" * 60)
    print("计算完成!")


if __name__ == "__main__":
    main()
