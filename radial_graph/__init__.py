from .radial_layout import GOLDEN_ANGLE, apply_radial_layout, base_radius, layout_bounds
from .render import encode_snapshot, link_endpoint_id
from .render_color import node_color
from .render_size import node_radius, word_size_scale

__all__ = [
    "GOLDEN_ANGLE",
    "apply_radial_layout",
    "base_radius",
    "layout_bounds",
    "encode_snapshot",
    "link_endpoint_id",
    "node_color",
    "node_radius",
    "word_size_scale",
]
