"""HTTP form layer.

Stands in for the browser page: each form posts its raw field values and
gets back the single status line. All domain rules live in the workflow.
"""

__all__ = [
    "contracts",
    "controllers",
]
