"""profilecard - GitHub profile statistics card generator."""

from profilecard.models.stats import StatsRecord
from profilecard.config import CardConfig
from profilecard.core.aggregator import collect, collect_stats
from profilecard.core.fetcher import GitHubSource
from profilecard.core.exporter import to_json, to_dict, save_json, load_json
from profilecard.core.renderer import format_number, render_svg, render_readme, save_outputs

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "collect",
    "collect_stats",
    "GitHubSource",
    "CardConfig",
    # Models
    "StatsRecord",
    # Rendering
    "format_number",
    "render_svg",
    "render_readme",
    "save_outputs",
    # Export utilities
    "to_json",
    "to_dict",
    "save_json",
    "load_json",
    "__version__",
]
