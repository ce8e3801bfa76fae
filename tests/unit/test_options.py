#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for pipeline option classes."""

from dataclasses import FrozenInstanceError

import pytest

from mdmindmap.exceptions import InvalidArgumentError, ValidationError
from mdmindmap.options import AnalysisOptions, ExpansionOptions, FilterOptions, PipelineOptions


@pytest.mark.unit
class TestDefaults:
    """Test default values."""

    def test_pipeline_defaults(self) -> None:
        """Test every optional stage is off by default."""
        options = PipelineOptions()
        assert options.filter_for_mindmap is False
        assert options.expand_complex_content is False
        assert options.enable_content_analysis is False
        assert options.include_analysis_metrics is False
        assert options.enable_expansion_logging is False
        assert options.cache_analysis_results is True
        assert options.analysis_depth == "moderate"
        assert options.min_complexity_threshold == 0.3

    @pytest.mark.parametrize("depth,limit", [("surface", 2), ("moderate", 4), ("deep", None)])
    def test_analysis_depth_limits(self, depth, limit) -> None:
        """Test each depth name maps to its numeric bound."""
        assert AnalysisOptions(analysis_depth=depth).max_depth == limit

    def test_frozen(self) -> None:
        """Test options cannot be reassigned."""
        with pytest.raises(FrozenInstanceError):
            PipelineOptions().filter_for_mindmap = True  # type: ignore[misc]


@pytest.mark.unit
class TestStageViews:
    """Test stage-specific option views."""

    def test_views_carry_values(self) -> None:
        """Test the stage views copy the shared fields."""
        options = PipelineOptions(
            include_types=["text"],
            max_expansion_depth=3,
            enabled_types=["table", "code"],
            min_complexity_threshold=0.5,
            enable_expansion_logging=True,
            analysis_depth="deep",
            include_analysis_metrics=True,
            cache_analysis_results=False,
        )

        assert options.filter_options() == FilterOptions(include_types=("text",))
        assert options.expansion_options() == ExpansionOptions(
            max_expansion_depth=3,
            enabled_types=("table", "code"),
            min_complexity_threshold=0.5,
            enable_expansion_logging=True,
        )
        analysis = options.analysis_options()
        assert analysis.analysis_depth == "deep"
        assert analysis.include_performance_metrics is True
        assert analysis.cache_analysis_results is False

    def test_sequences_normalized_to_tuples(self) -> None:
        """Test list arguments are stored as tuples."""
        assert PipelineOptions(enabled_types=["table"]).enabled_types == ("table",)
        assert ExpansionOptions(enabled_types=["list"]).enabled_types == ("list",)


@pytest.mark.unit
class TestValidation:
    """Test invalid option values."""

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_range(self, threshold) -> None:
        """Test thresholds outside [0, 1] are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            ExpansionOptions(min_complexity_threshold=threshold)
        assert exc_info.value.parameter_name == "min_complexity_threshold"

    def test_threshold_bounds_accepted(self) -> None:
        """Test 0 and 1 are valid thresholds."""
        assert ExpansionOptions(min_complexity_threshold=0.0).min_complexity_threshold == 0.0
        assert ExpansionOptions(min_complexity_threshold=1.0).min_complexity_threshold == 1.0

    def test_negative_depth(self) -> None:
        """Test a negative expansion depth is rejected."""
        with pytest.raises(ValidationError):
            ExpansionOptions(max_expansion_depth=-1)

    def test_unknown_analysis_depth(self) -> None:
        """Test unknown depth names are rejected."""
        with pytest.raises(ValidationError):
            AnalysisOptions(analysis_depth="extreme")  # type: ignore[arg-type]

    @pytest.mark.parametrize("name", ["include_types", "enabled_types"])
    def test_bare_string_type_list(self, name) -> None:
        """Test a single string is not accepted as a type list."""
        with pytest.raises(ValidationError):
            PipelineOptions(**{name: "table"})

    def test_pipeline_validates_stage_values(self) -> None:
        """Test invalid stage values fail when the pipeline options are built."""
        with pytest.raises(ValidationError):
            PipelineOptions(min_complexity_threshold=2.0)


@pytest.mark.unit
class TestCreateUpdated:
    """Test cloning with overrides."""

    def test_returns_new_instance(self) -> None:
        """Test the original options are unchanged."""
        original = PipelineOptions()
        updated = original.create_updated(filter_for_mindmap=True)
        assert updated.filter_for_mindmap is True
        assert original.filter_for_mindmap is False

    def test_validation_runs_on_update(self) -> None:
        """Test updated values are validated."""
        with pytest.raises(ValidationError):
            ExpansionOptions().create_updated(min_complexity_threshold=5.0)

    def test_unknown_keyword(self) -> None:
        """Test unknown option names raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            PipelineOptions().create_updated(filterForMindmap=True)
        assert exc_info.value.parameter_name == "filterForMindmap"
