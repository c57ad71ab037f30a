"""Console helpers for the Noh boundary runner."""

from .console import ok, fail, dim, header, summary_table

__all__ = [
    "ok",
    "fail",
    "dim",
    "header",
    "summary_table",
]
