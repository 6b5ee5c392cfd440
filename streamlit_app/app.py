"""
LTV & 回本估算 - Streamlit 版本

参数调整后立即重新计算
"""

import sys
import io
import csv
from pathlib import Path

# 添加后端代码路径
current_dir = Path(__file__).parent.resolve()
backend_dir_str = str((current_dir.parent / "backend").resolve())
if backend_dir_str not in sys.path:
    sys.path.insert(0, backend_dir_str)

import streamlit as st
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ltv_engine.models.metrics import EconomicMetrics
from ltv_engine.models.presets import DEFAULT_METRICS, load_presets
from ltv_engine.core.calculator import run_calculation
from ltv_engine.utils.validation import validate_metrics
from ltv_engine.utils.diagnosis import build_diagnosis_prompt


# 页面配置
st.set_page_config(
    page_title="LTV & 回本估算",
    page_icon="🧮",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("🧮 LTV & 回本估算")
st.caption("基于幂函数回归模型 (Power Law) 预测长线 LTV。")

presets = load_presets()

# 初始化 session_state
if "metrics" not in st.session_state:
    st.session_state.metrics = DEFAULT_METRICS.model_dump()

# ============ 左侧参数面板 ============
with st.sidebar:
    st.header("⚙️ 参数配置")

    # 品类模板
    st.subheader("📋 品类模板")
    cols = st.columns(2)
    for i, (name, preset) in enumerate(presets.items()):
        with cols[i % 2]:
            if st.button(name, use_container_width=True):
                st.session_state.metrics = preset.model_dump()

    values = st.session_state.metrics

    st.subheader("💰 基础指标")
    col1, col2 = st.columns(2)
    with col1:
        cpi = st.number_input("CPI ($)", 0.0, 1000.0, float(values["cpi"]), 0.01, format="%.2f")
    with col2:
        arpdau = st.number_input("ARPDAU ($)", 0.0, 1000.0, float(values["arpdau"]), 0.01, format="%.2f")

    col1, col2 = st.columns(2)
    with col1:
        organic_ratio = st.number_input(
            "自然量占比 (%)", 0.0, 100.0, float(values["organic_ratio"]), 1.0,
            help="自然量不产生买量成本，用于计算有效 CPI",
        )
    with col2:
        daily_ua = st.number_input("每日新增", 0, 10_000_000, int(values["daily_ua"]), 1000)

    st.subheader("📉 留存率 (%)")
    st.caption("填 0 表示缺失，不参与拟合")
    retention = {}
    for day in (1, 7, 28, 60, 90, 180, 365):
        key = f"retention_d{day}"
        retention[key] = st.number_input(f"Day {day}", 0.0, 100.0, float(values[key]), 0.5, format="%.1f")

metrics = EconomicMetrics(
    cpi=cpi,
    arpdau=arpdau,
    organic_ratio=organic_ratio,
    daily_ua=int(daily_ua),
    **retention,
)
st.session_state.metrics = metrics.model_dump()

validation = validate_metrics(metrics)
for warning in validation.warnings:
    st.warning(warning)

result = run_calculation(metrics)

if result.status != "success":
    st.info("请至少填写两个留存节点（或仅填写次日留存）以生成留存曲线。")
    st.stop()

summary = result.summary
sampled = result.sampled_series

# ============ 显示结果 ============
st.subheader("📊 关键指标")
col1, col2, col3, col4 = st.columns(4)

with col1:
    st.metric("有效 CPI", f"${summary.effective_cpi:.2f}", delta=f"CPI ${metrics.cpi:.2f}", delta_color="off")

with col2:
    st.metric("回本周期", f"Day {summary.payback_day}" if summary.payback_day else "> 365 天")

with col3:
    st.metric("D90 LTV", f"${summary.d90_ltv:.2f}")

with col4:
    st.metric("D365 LTV", f"${summary.d365_ltv:.2f}")

col1, col2, col3 = st.columns(3)
with col1:
    drawdown = summary.max_drawdown
    st.metric("最大资金占用", f"${drawdown.amount:,.0f}", delta=f"Day {drawdown.day}", delta_color="off")
with col2:
    st.metric("累计盈亏平衡", f"Day {summary.break_even_day}" if summary.break_even_day else "> 365 天")
with col3:
    st.metric(
        "留存曲线",
        f"R(t) = {result.curve.a:.3f} · t^{result.curve.b:.3f}",
        delta="单点估算" if result.curve.fallback else None,
        delta_color="off",
    )

st.divider()

days = [row.day for row in sampled]
tab1, tab2, tab3, tab4 = st.tabs(["📈 LTV & ROAS", "👥 DAU 趋势", "💰 累计利润", "📋 每日明细"])

with tab1:
    st.subheader("单用户 LTV vs 有效 CPI")

    fig = make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(go.Scatter(
        x=days,
        y=[row.ltv for row in sampled],
        name="LTV",
        mode="lines",
        line=dict(color="#1890ff", width=2),
        fill="tozeroy",
        fillcolor="rgba(24, 144, 255, 0.1)",
    ))
    fig.add_trace(go.Scatter(
        x=days,
        y=[row.roas for row in sampled],
        name="ROAS (%)",
        mode="lines",
        line=dict(color="#722ed1", width=2, dash="dot"),
    ), secondary_y=True)

    fig.add_hline(y=summary.effective_cpi, line_dash="dash", line_color="#ff4d4f",
                  annotation_text=f"eCPI ${summary.effective_cpi:.2f}")
    if summary.payback_day:
        fig.add_vline(x=summary.payback_day, line_dash="dash", line_color="#faad14",
                      annotation_text=f"回本 Day {summary.payback_day}")

    fig.update_layout(
        xaxis_title="天数",
        hovermode="x unified",
        height=400,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    fig.update_yaxes(title_text="LTV ($)", secondary_y=False)
    fig.update_yaxes(title_text="ROAS (%)", secondary_y=True)

    st.plotly_chart(fig, use_container_width=True)

with tab2:
    st.subheader("DAU 趋势")

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=days,
        y=[row.dau for row in sampled],
        name="DAU",
        mode="lines",
        line=dict(color="#52c41a", width=2),
        fill="tozeroy",
        fillcolor="rgba(82, 196, 26, 0.1)",
    ))
    fig.update_layout(xaxis_title="天数", yaxis_title="用户数", hovermode="x unified", height=400)

    st.plotly_chart(fig, use_container_width=True)

with tab3:
    st.subheader("累计利润")

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=days,
        y=[row.daily_profit for row in sampled],
        name="日利润",
        marker_color=["#ff4d4f" if row.daily_profit < 0 else "#52c41a" for row in sampled],
        opacity=0.5,
    ))
    fig.add_trace(go.Scatter(
        x=days,
        y=[row.cumulative_profit for row in sampled],
        name="累计利润",
        mode="lines",
        line=dict(color="#1890ff", width=2),
    ))

    if drawdown.day:
        fig.add_annotation(x=drawdown.day, y=drawdown.amount, text=f"最大亏损 Day {drawdown.day}")
    if summary.break_even_day:
        fig.add_vline(x=summary.break_even_day, line_dash="dash", line_color="#faad14",
                      annotation_text=f"盈亏平衡 Day {summary.break_even_day}")

    # 零线
    fig.add_hline(y=0, line_dash="dot", line_color="gray")
    fig.update_layout(xaxis_title="天数", yaxis_title="金额 ($)", hovermode="x unified", height=400)

    st.plotly_chart(fig, use_container_width=True)

with tab4:
    st.subheader("每日运营明细")

    table = [
        {
            "天数": row.day,
            "新增": row.new_users,
            "DAU": row.dau,
            "收入": round(row.revenue, 2),
            "成本": round(row.cost, 2),
            "日利润": round(row.daily_profit, 2),
            "累计利润": round(row.cumulative_profit, 2),
        }
        for row in result.rows
    ]
    st.dataframe(table, use_container_width=True, hide_index=True)

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=list(table[0].keys()))
    writer.writeheader()
    writer.writerows(table)
    st.download_button("⬇️ 下载 CSV", output.getvalue(), file_name="ltv_daily_operations.csv", mime="text/csv")

# AI 诊断提示词
with st.expander("🤖 AI 诊断提示词"):
    countries = st.text_input("目标国家/地区", value="US")
    st.code(build_diagnosis_prompt(metrics, countries), language="text")

# 执行时间
st.caption(f"⏱️ 计算执行时间: {result.execution_time_ms}ms")
