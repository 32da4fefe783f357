__all__ = [
    "clahe",
    "cli",
    "errors",
    "filters",
    "io",
    "summary",
]

__version__ = "0.1.0"
