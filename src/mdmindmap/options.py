#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option classes for the markdown-to-tree pipeline.

Each pipeline stage reads its configuration from a frozen dataclass. The
top-level :class:`PipelineOptions` bundles every stage switch accepted by
``parse_markdown_to_tree`` and can hand out the stage-specific views used by
the filter, the expander and the analysis orchestrator.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdmindmap.constants import (
    ANALYSIS_DEPTH_LIMITS,
    DEFAULT_ANALYSIS_DEPTH,
    DEFAULT_CACHE_ANALYSIS_RESULTS,
    DEFAULT_COMPLEXITY_THRESHOLD,
    DEFAULT_ENABLE_CONTENT_ANALYSIS,
    DEFAULT_ENABLE_EXPANSION_LOGGING,
    DEFAULT_EXPAND_COMPLEX_CONTENT,
    DEFAULT_FILTER_FOR_MINDMAP,
    DEFAULT_INCLUDE_ANALYSIS_METRICS,
    AnalysisDepth,
)
from mdmindmap.exceptions import InvalidArgumentError, ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        Raises
        ------
        InvalidArgumentError
            If a keyword does not name a field of this options class

        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise InvalidArgumentError(
                f"Unknown option(s) for {type(self).__name__}: {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=kwargs[unknown[0]],
            )
        return replace(self, **kwargs)


def _validate_threshold(value: float, name: str) -> None:
    if not 0.0 <= value <= 1.0:
        raise ValidationError(f"{name} must be between 0 and 1, got {value}", parameter_name=name, parameter_value=value)


def _validate_depth(value: int | None, name: str) -> None:
    if value is not None and value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}", parameter_name=name, parameter_value=value)


def _validate_types(value: tuple[str, ...] | None, name: str) -> None:
    if value is not None and isinstance(value, str):
        raise ValidationError(
            f"{name} must be a sequence of type names, not a string", parameter_name=name, parameter_value=value
        )


@dataclass(frozen=True)
class FilterOptions(CloneFrozenMixin):
    """Configuration for the mindmap filter.

    Parameters
    ----------
    include_types : tuple of str or None, default None
        When set, only non-header children of these types contribute to a
        leaf's ``detail``; every other non-header child is dropped.

    """

    include_types: tuple[str, ...] | None = field(
        default=None,
        metadata={"help": "Restrict which content node types survive filtering", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate and normalize filter options."""
        _validate_types(self.include_types, "include_types")
        if self.include_types is not None:
            object.__setattr__(self, "include_types", tuple(self.include_types))


@dataclass(frozen=True)
class ExpansionOptions(CloneFrozenMixin):
    """Configuration for re-expanding complex leaf details.

    Parameters
    ----------
    max_expansion_depth : int or None, default None
        Only leaves at a depth strictly below this bound are expanded.
        ``None`` means unlimited.
    enabled_types : tuple of str or None, default None
        Detected content types allowed to expand. ``None`` allows all.
    min_complexity_threshold : float, default 0.3
        A leaf expands only when its complexity score exceeds this value.
    enable_expansion_logging : bool, default False
        Log expansion statistics at INFO level after each run.

    """

    max_expansion_depth: int | None = field(
        default=None,
        metadata={"help": "Maximum tree depth at which leaves are expanded (None = unlimited)", "type": int},
    )
    enabled_types: tuple[str, ...] | None = field(
        default=None,
        metadata={"help": "Content types eligible for expansion (None = all)"},
    )
    min_complexity_threshold: float = field(
        default=DEFAULT_COMPLEXITY_THRESHOLD,
        metadata={"help": "Complexity score a leaf must exceed to expand", "type": float},
    )
    enable_expansion_logging: bool = field(
        default=DEFAULT_ENABLE_EXPANSION_LOGGING,
        metadata={"help": "Log expansion statistics", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate expansion options.

        Raises
        ------
        ValidationError
            If the threshold is outside [0, 1] or the depth is negative.

        """
        _validate_depth(self.max_expansion_depth, "max_expansion_depth")
        _validate_threshold(self.min_complexity_threshold, "min_complexity_threshold")
        _validate_types(self.enabled_types, "enabled_types")
        if self.enabled_types is not None:
            object.__setattr__(self, "enabled_types", tuple(self.enabled_types))


@dataclass(frozen=True)
class AnalysisOptions(CloneFrozenMixin):
    """Configuration for the content analysis orchestrator.

    Parameters
    ----------
    analysis_depth : {"surface", "moderate", "deep"}, default "moderate"
        How deep into the tree nodes are analyzed.
    cache_analysis_results : bool, default True
        Reuse results for identical detail strings within one run.
    include_performance_metrics : bool, default False
        Log timing and cache statistics at INFO level after the run.

    """

    analysis_depth: AnalysisDepth = field(
        default=DEFAULT_ANALYSIS_DEPTH,
        metadata={"help": "Analysis depth: surface, moderate or deep", "choices": list(ANALYSIS_DEPTH_LIMITS)},
    )
    cache_analysis_results: bool = field(
        default=DEFAULT_CACHE_ANALYSIS_RESULTS,
        metadata={"help": "Cache analysis results keyed on detail content"},
    )
    include_performance_metrics: bool = field(
        default=DEFAULT_INCLUDE_ANALYSIS_METRICS,
        metadata={"help": "Log analysis timing and cache statistics", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate analysis options.

        Raises
        ------
        ValidationError
            If the analysis depth name is unknown.

        """
        if self.analysis_depth not in ANALYSIS_DEPTH_LIMITS:
            raise ValidationError(
                f"analysis_depth must be one of {sorted(ANALYSIS_DEPTH_LIMITS)}, got {self.analysis_depth!r}",
                parameter_name="analysis_depth",
                parameter_value=self.analysis_depth,
            )

    @property
    def max_depth(self) -> int | None:
        """Return the numeric depth bound for the configured analysis depth."""
        return ANALYSIS_DEPTH_LIMITS[self.analysis_depth]


@dataclass(frozen=True)
class PipelineOptions(CloneFrozenMixin):
    """All switches accepted by ``parse_markdown_to_tree``.

    Parameters
    ----------
    filter_for_mindmap : bool, default False
        Collapse non-structural content into leaf ``detail`` strings.
    include_types : tuple of str or None, default None
        See :class:`FilterOptions`.
    expand_complex_content : bool, default False
        Re-expand complex leaf details into typed child nodes.
    max_expansion_depth : int or None, default None
        See :class:`ExpansionOptions`.
    enabled_types : tuple of str or None, default None
        See :class:`ExpansionOptions`.
    min_complexity_threshold : float, default 0.3
        See :class:`ExpansionOptions`.
    enable_content_analysis : bool, default False
        Attach ``detailAnalysis`` metadata to nodes with detail.
    analysis_depth : {"surface", "moderate", "deep"}, default "moderate"
        See :class:`AnalysisOptions`.
    include_analysis_metrics : bool, default False
        Log analysis statistics after the run.
    cache_analysis_results : bool, default True
        See :class:`AnalysisOptions`.
    enable_expansion_logging : bool, default False
        See :class:`ExpansionOptions`.

    """

    filter_for_mindmap: bool = field(
        default=DEFAULT_FILTER_FOR_MINDMAP,
        metadata={"help": "Collapse non-structural content into leaf detail", "importance": "core"},
    )
    include_types: tuple[str, ...] | None = field(
        default=None,
        metadata={"help": "Restrict which content node types survive filtering"},
    )
    expand_complex_content: bool = field(
        default=DEFAULT_EXPAND_COMPLEX_CONTENT,
        metadata={"help": "Expand complex leaf detail into typed child nodes", "importance": "core"},
    )
    max_expansion_depth: int | None = field(default=None, metadata={"help": "Maximum expansion depth"})
    enabled_types: tuple[str, ...] | None = field(default=None, metadata={"help": "Content types to expand"})
    min_complexity_threshold: float = field(
        default=DEFAULT_COMPLEXITY_THRESHOLD,
        metadata={"help": "Complexity score a leaf must exceed to expand"},
    )
    enable_content_analysis: bool = field(
        default=DEFAULT_ENABLE_CONTENT_ANALYSIS,
        metadata={"help": "Attach detail analysis metadata to nodes", "importance": "core"},
    )
    analysis_depth: AnalysisDepth = field(default=DEFAULT_ANALYSIS_DEPTH, metadata={"help": "Analysis depth"})
    include_analysis_metrics: bool = field(
        default=DEFAULT_INCLUDE_ANALYSIS_METRICS,
        metadata={"help": "Log analysis statistics", "importance": "advanced"},
    )
    cache_analysis_results: bool = field(
        default=DEFAULT_CACHE_ANALYSIS_RESULTS,
        metadata={"help": "Cache analysis results within a run", "importance": "advanced"},
    )
    enable_expansion_logging: bool = field(
        default=DEFAULT_ENABLE_EXPANSION_LOGGING,
        metadata={"help": "Log expansion statistics", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Normalize type sequences and validate by building each stage view once."""
        for name in ("include_types", "enabled_types"):
            value = getattr(self, name)
            _validate_types(value, name)
            if value is not None:
                object.__setattr__(self, name, tuple(value))
        self.filter_options()
        self.expansion_options()
        self.analysis_options()

    def filter_options(self) -> FilterOptions:
        """Return the filter stage configuration."""
        return FilterOptions(include_types=self.include_types)

    def expansion_options(self) -> ExpansionOptions:
        """Return the expansion stage configuration."""
        return ExpansionOptions(
            max_expansion_depth=self.max_expansion_depth,
            enabled_types=self.enabled_types,
            min_complexity_threshold=self.min_complexity_threshold,
            enable_expansion_logging=self.enable_expansion_logging,
        )

    def analysis_options(self) -> AnalysisOptions:
        """Return the analysis stage configuration."""
        return AnalysisOptions(
            analysis_depth=self.analysis_depth,
            cache_analysis_results=self.cache_analysis_results,
            include_performance_metrics=self.include_analysis_metrics,
        )


__all__ = [
    "CloneFrozenMixin",
    "FilterOptions",
    "ExpansionOptions",
    "AnalysisOptions",
    "PipelineOptions",
]
