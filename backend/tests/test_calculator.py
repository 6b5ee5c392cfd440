"""
LTV 计算主流程测试
"""

import math
import pytest
from ltv_engine.models.metrics import EconomicMetrics, EngineConfig
from ltv_engine.models.presets import DEFAULT_METRICS, load_presets
from ltv_engine.core.calculator import run_calculation


def reference_calculation(metrics):
    """逐日循环的参考实现，用于固定回归基准"""
    points = [(t, r / 100) for t, r in metrics.retention_dict().items() if r > 0]
    n = len(points)
    xs = [math.log(t) for t, _ in points]
    ys = [math.log(r) for _, r in points]
    sum_x, sum_y = sum(xs), sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_xx = sum(x * x for x in xs)
    b = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    a = math.exp((sum_y - b * sum_x) / n)

    e_cpi = metrics.cpi * (1 - metrics.organic_ratio / 100)
    payback_day = None
    ltv = 0.0
    ltv_by_day = {}
    for t in range(1, 366):
        ltv += a * t ** b * metrics.arpdau
        ltv_by_day[t] = ltv
        if payback_day is None and ltv >= e_cpi:
            payback_day = t
    return a, b, e_cpi, payback_day, ltv_by_day


@pytest.fixture
def us_metrics():
    """2677美国 场景（仅 D1/D7/D28）"""
    return EconomicMetrics(
        cpi=2.00,
        retention_d1=40,
        retention_d7=20,
        retention_d28=10,
        arpdau=0.19,
        organic_ratio=15,
        daily_ua=10000,
    )


class TestScenario:
    """2677美国 场景测试"""

    def test_effective_cpi(self, us_metrics):
        result = run_calculation(us_metrics)
        assert result.summary.effective_cpi == pytest.approx(1.70)

    def test_curve_shape(self, us_metrics):
        result = run_calculation(us_metrics)

        assert result.status == "success"
        assert result.curve.fallback is False
        assert -1 < result.curve.b < 0
        assert result.curve.fitted_values["day1"] == pytest.approx(result.curve.a)

    def test_matches_reference(self, us_metrics):
        """与参考实现的回本日、D90/D365 LTV 一致"""
        a, b, e_cpi, payback_day, ltv_by_day = reference_calculation(us_metrics)
        result = run_calculation(us_metrics)

        assert result.curve.a == pytest.approx(a, rel=1e-9)
        assert result.curve.b == pytest.approx(b, rel=1e-9)
        assert result.summary.payback_day == payback_day
        assert result.summary.d90_ltv == pytest.approx(ltv_by_day[90], rel=1e-9)
        assert result.summary.d365_ltv == pytest.approx(ltv_by_day[365], rel=1e-9)

    def test_payback_is_finite(self, us_metrics):
        result = run_calculation(us_metrics)

        assert result.summary.payback_day is not None
        assert 60 <= result.summary.payback_day <= 110
        assert result.summary.d90_ltv > result.summary.effective_cpi

    def test_drawdown_precedes_payback(self, us_metrics):
        """日利润在回本日转正，最大亏损出现在回本日前一天"""
        result = run_calculation(us_metrics)
        summary = result.summary

        assert summary.max_drawdown.day == summary.payback_day - 1
        assert summary.max_drawdown.amount < 0
        assert summary.break_even_day is None or summary.break_even_day >= summary.payback_day

    def test_golden_values(self, us_metrics):
        """固定回归基准：曲线参数、回本日、D90 LTV、最大亏损与累计回本日"""
        result = run_calculation(us_metrics)
        summary = result.summary

        assert result.curve.a == pytest.approx(0.4130009906937673, rel=1e-9)
        assert result.curve.b == pytest.approx(-0.4121543422230746, rel=1e-9)
        assert summary.payback_day == 83
        assert summary.d90_ltv == pytest.approx(1.7947899425713, rel=1e-9)
        assert summary.break_even_day == 180
        assert summary.max_drawdown.day == 82
        assert summary.max_drawdown.amount == pytest.approx(-532761.486, rel=1e-6)

    def test_break_even_consistency(self, us_metrics):
        result = run_calculation(us_metrics)
        d = result.summary.break_even_day

        if d is not None:
            assert result.rows[d - 1].cumulative_profit >= 0
            assert all(row.cumulative_profit < 0 for row in result.rows[: d - 1])
        else:
            assert all(row.cumulative_profit < 0 for row in result.rows)

    def test_sampled_series(self, us_metrics):
        result = run_calculation(us_metrics)
        days = [row.day for row in result.sampled_series]

        assert len(result.rows) == 365
        assert {1, 7, 28, 60, 90, 180, 365} <= set(days)
        assert all(day % 5 == 0 or day in (1, 7, 28) for day in days)


class TestPresets:
    """预设模板测试"""

    def test_all_presets_calculate(self):
        for name, metrics in load_presets().items():
            result = run_calculation(metrics)
            assert result.status == "success", name
            assert len(result.rows) == 365, name
            assert result.curve.b < 0, name

    def test_full_us_preset_matches_reference(self):
        metrics = load_presets()["2677美国"]
        a, b, e_cpi, payback_day, ltv_by_day = reference_calculation(metrics)
        result = run_calculation(metrics)

        assert result.summary.payback_day == payback_day
        assert result.summary.d90_ltv == pytest.approx(ltv_by_day[90], rel=1e-9)

    def test_default_metrics(self):
        result = run_calculation(DEFAULT_METRICS)
        assert result.status == "success"


class TestEdgeCases:
    """边界情况测试"""

    def test_no_retention_data(self):
        """无留存数据时返回空结果，不抛异常"""
        result = run_calculation(EconomicMetrics(cpi=2.0, arpdau=0.2))

        assert result.status == "insufficient_data"
        assert result.curve is None
        assert result.rows == []
        assert result.sampled_series == []
        assert result.summary.payback_day is None
        assert result.summary.break_even_day is None
        assert result.summary.max_drawdown is None

    def test_single_non_day1_point(self):
        result = run_calculation(EconomicMetrics(retention_d7=20))
        assert result.status == "insufficient_data"

    def test_day1_fallback(self):
        result = run_calculation(EconomicMetrics(retention_d1=45))

        assert result.status == "success"
        assert result.curve.fallback is True
        assert result.curve.a == pytest.approx(0.45)
        assert result.curve.b == -0.5

    def test_configurable_fallback_exponent(self):
        config = EngineConfig(fallback_exponent=-0.3)
        result = run_calculation(EconomicMetrics(retention_d1=45), config)

        assert result.curve.b == -0.3

    def test_short_horizon(self):
        config = EngineConfig(horizon_days=60)
        result = run_calculation(DEFAULT_METRICS, config)

        assert len(result.rows) == 60
        assert result.summary.d365_ltv == result.rows[-1].ltv

    def test_zero_arpdau(self):
        """ARPDAU 为 0 时无收入、无法回本"""
        metrics = EconomicMetrics(retention_d1=40, retention_d7=20, arpdau=0.0)
        result = run_calculation(metrics)

        assert result.summary.payback_day is None
        assert result.summary.break_even_day is None
        assert all(row.revenue == 0.0 for row in result.rows)

    def test_deterministic(self, us_metrics):
        first = run_calculation(us_metrics)
        second = run_calculation(us_metrics)

        assert first.metrics_hash == second.metrics_hash
        assert first.rows == second.rows
        assert first.summary == second.summary
