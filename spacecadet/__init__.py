"""Parts of a pinball table engine: rectangle packing, text editing with undo, depth-buffered bitmaps, timers, score formatting and frame pacing statistics."""

__version__ = "0.1.0"
__all__ = ["rectpack", "textedit_undo", "textedit_layout", "textedit", "zdrv", "timers", "score", "pacing"]