"""Turn/action processing helpers.

This package centralizes validation + dispatch so every action, and the
program's automatic answer to it, flows through the same pipeline.
"""
