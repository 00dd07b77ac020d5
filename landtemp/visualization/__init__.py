"""Map layers and quicklook rendering for yearly LST results."""

from landtemp.visualization.layers import Layer, build_layers, render_quicklook

__all__ = ["Layer", "build_layers", "render_quicklook"]
