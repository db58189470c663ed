from . import (
    canon,
    exceptions,
    types,
    config,
    utils,
    validate,
    stats,
    degreedays,
    regression,
    forecast,
    comparison,
    analysis,
)

__all__ = [
    "canon",
    "exceptions",
    "types",
    "config",
    "utils",
    "validate",
    "stats",
    "degreedays",
    "regression",
    "forecast",
    "comparison",
    "analysis",
]
