# render/__init__.py
# Package init for image export of sampled heightfields

from .render_topdown import render_topdown, render_height, blend_colors, hex_to_rgb

__all__ = ["render_topdown", "render_height", "blend_colors", "hex_to_rgb"]
