"""Editor convenience macros over a host-agnostic text buffer."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "runtime",
    "transform",
]

__version__ = "0.1.0"
