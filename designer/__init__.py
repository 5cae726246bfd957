"""
Workflow Designer - validation and simulation core for visual workflows.

Checks that a graph of typed steps (start, task, approval, automated, end)
forms an executable process and produces a deterministic dry-run trace.
"""

__version__ = "1.0.0"
