"""
Layout constants for the roadmap canvas.
Columns are tree depth (left to right), rows are order of appearance within a depth.
"""

# Horizontal distance between depth columns
X_SPACING = 300

# Vertical distance between nodes sharing a depth
LEVEL_HEIGHT = 150

# Reference node footprint on the canvas (X_SPACING leaves a gap after it)
NODE_WIDTH = 250

DEFAULT_NODE_TYPE = "default"

NODE_STYLE = {
    "background": "#1e293b",
    "color": "#fff",
    "border": "1px solid #475569",
    "width": 180,
    "fontSize": "12px",
    "padding": "10px",
}

EDGE_STYLE = {"stroke": "#64748b"}
