"""Battle report analysis package."""

__all__ = [
    "config",
    "matchups",
    "lineup",
    "effects",
    "catalog",
    "normalize",
    "analyzer",
    "render",
    "report_pdf",
    "cli",
]
