"""Rendering engine.

- width: monospace width of mixed ASCII / CJK text, color sequences ignored
- grid: month layout into fixed-width cells with recorded cell positions
- annotate: holiday / workday / today coloring on top of the laid-out text
- compose: month blocks and the final document
"""

__all__ = ["width", "grid", "annotate", "compose"]
