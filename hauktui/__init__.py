"""hauktui — a copy-paste component registry for terminal UIs."""

__version__ = "0.0.3"
