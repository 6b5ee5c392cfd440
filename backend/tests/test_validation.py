"""
参数校验与诊断提示词测试
"""

import pytest
from pydantic import ValidationError
from ltv_engine.models.metrics import EconomicMetrics
from ltv_engine.models.presets import DEFAULT_METRICS, get_preset, load_presets
from ltv_engine.utils.validation import validate_metrics
from ltv_engine.utils.diagnosis import build_diagnosis_prompt


class TestEconomicMetrics:
    """输入模型测试"""

    def test_retention_points_filter_zero(self):
        metrics = EconomicMetrics(retention_d1=40, retention_d7=0, retention_d28=10)
        assert metrics.retention_points() == [(1, 0.40), (28, 0.10)]

    def test_retention_dict(self):
        metrics = EconomicMetrics(retention_d1=40, retention_d7=20, retention_d365=2)
        retention = metrics.retention_dict()

        assert list(retention) == [1, 7, 28, 60, 90, 180, 365]
        assert retention[1] == 40
        assert retention[28] == 0
        assert retention[365] == 2
        assert not hasattr(metrics, "to_dict")

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_METRICS.cpi = 1.0

    def test_organic_ratio_range(self):
        with pytest.raises(ValidationError):
            EconomicMetrics(organic_ratio=120)

    def test_negative_cpi_rejected(self):
        with pytest.raises(ValidationError):
            EconomicMetrics(cpi=-1)


class TestPresets:
    """预设加载测试"""

    def test_load_presets(self):
        presets = load_presets()

        assert len(presets) == 5
        assert "2677美国" in presets
        assert presets["策略 (SLG)"].cpi == 15.0

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            get_preset("不存在")


class TestValidateMetrics:
    """校验测试"""

    def test_default_metrics_valid(self):
        result = validate_metrics(DEFAULT_METRICS)

        assert result.valid
        assert result.errors == []

    def test_no_retention(self):
        result = validate_metrics(EconomicMetrics())

        assert not result.valid
        assert len(result.errors) == 1

    def test_single_non_day1_point(self):
        result = validate_metrics(EconomicMetrics(retention_d28=10))
        assert not result.valid

    def test_day1_only_warns(self):
        result = validate_metrics(EconomicMetrics(retention_d1=40))

        assert result.valid
        assert any("次日留存" in w for w in result.warnings)

    def test_increasing_retention_warns(self):
        result = validate_metrics(EconomicMetrics(retention_d1=20, retention_d7=30))

        assert result.valid
        assert any("Day 7" in w for w in result.warnings)

    def test_zero_arpdau_and_ua_warn(self):
        result = validate_metrics(EconomicMetrics(retention_d1=40, retention_d7=20, arpdau=0, daily_ua=0))
        assert len(result.warnings) == 2


class TestDiagnosisPrompt:
    """诊断提示词测试"""

    def test_prompt_contains_serialized_metrics(self):
        prompt = build_diagnosis_prompt(DEFAULT_METRICS, "US")

        assert DEFAULT_METRICS.model_dump_json() in prompt
        assert "Target countries: US" in prompt
        assert "payback period" in prompt

