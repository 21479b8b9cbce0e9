"""Configuration for graph layout and aggregation."""

from dataclasses import dataclass, field

from carenet.config import Settings, settings


@dataclass
class LayoutConfig:
    """Canvas geometry for the column/grid layout."""

    width: float = 1400.0
    height: float = 800.0
    margin: float = 200.0  # Organization columns sit this far from the left/right edges

    # Case grid, centered horizontally
    case_band: float = 500.0
    grid_top: float = 100.0
    grid_height: float = 600.0

    @property
    def left_column(self) -> float:
        return self.margin

    @property
    def right_column(self) -> float:
        return self.width - self.margin

    @property
    def center(self) -> float:
        return self.width / 2

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "LayoutConfig":
        source = source or settings
        return cls(
            width=source.layout_width,
            height=source.layout_height,
            margin=source.layout_margin,
            case_band=source.layout_case_band,
            grid_top=source.layout_grid_top,
            grid_height=source.layout_grid_height,
        )


@dataclass
class ExplorerConfig:
    """Combined configuration for an explorer session."""

    layout: LayoutConfig = field(default_factory=LayoutConfig)

    aggregation_threshold: int = 2
    jitter_amplitude: float = 30.0
    jitter_seed: int | None = None  # None disables jitter

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "ExplorerConfig":
        source = source or settings
        return cls(
            layout=LayoutConfig.from_settings(source),
            aggregation_threshold=source.aggregation_threshold,
            jitter_amplitude=source.layout_jitter,
            jitter_seed=source.layout_seed,
        )
