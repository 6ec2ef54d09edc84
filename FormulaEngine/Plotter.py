# Plotter.py
"""""
Plot workspace: named formula slots for 2-D curves (f1, f2, ...) and 3-D
surfaces (s1, s2, ...), 3-D vectors (v1, v2, ...) and the sampling that turns an
AST into drawable data.

All slots share ONE Arena. Editing any slot resets that arena and re-parses
every slot, since the old ASTs die with the arena generation.

Sampling never draws anything itself: a renderer gets polylines (pen lifted
wherever the formula is NaN or infinite) and surface cells with four finite
corners.
"""""

import math
from collections import namedtuple

from . import config_manager as config_manager
from . import error as E
from .arena import Arena
from .MathEngine import Parser
from .ScientificEngine import evaluate, evaluate_x

EXPR_MAX = 255  # longest formula text kept per slot
VECTOR_MAX = 16  # vector entries of the 3-D view
VECTOR_TEXT_MAX = 127

SurfaceCell = namedtuple("SurfaceCell", ["x0", "y0", "x1", "y1", "z00", "z10", "z01", "z11"])


class FunctionSlot:
    def __init__(self, name, expr_text):
        self.name = name
        self.expr_text = expr_text[:EXPR_MAX]
        self.ast = None
        self.valid = False
        self.visible = True
        self.error_message = ""

    def __repr__(self):
        state = "valid" if self.valid else "invalid"
        return f"FunctionSlot({self.name}: {self.expr_text!r}, {state})"


class VectorEntry:
    """An arrow from the origin to (x, y, z) in the 3-D view."""

    def __init__(self, name, text, x, y, z):
        self.name = name
        self.text = text[:VECTOR_TEXT_MAX]
        self.x = x
        self.y = y
        self.z = z
        self.visible = True

    @property
    def tip(self):
        return (self.x, self.y, self.z)

    def __repr__(self):
        return f"VectorEntry({self.name}: {self.tip})"


def parse_vector(text):
    """Read "x,y,z" into three floats. Returns None for anything else."""
    parts = text.split(",")
    if len(parts) != 3:
        return None
    try:
        return tuple(float(part) for part in parts)
    except ValueError:
        return None


# -----------------------------
# Sampling
# -----------------------------

def sample_curve(ast, x_min, x_max, steps, max_jump=None):
    """Sample y = f(x) at steps + 1 evenly spaced points.

    Returns a list of polylines, each a list of (x, y). The pen is lifted at
    every NaN/inf sample and, when max_jump is given, between neighbours whose
    y values differ by more than max_jump (asymptotes such as tan(x)).
    """
    if steps < 1:
        raise ValueError("steps must be at least 1")

    segments = []
    current = []
    for i in range(steps + 1):
        x = x_min + (x_max - x_min) * i / steps
        y = evaluate_x(ast, x)

        if not math.isfinite(y):
            if current:
                segments.append(current)
                current = []
            continue

        if current and max_jump is not None and abs(y - current[-1][1]) > max_jump:
            segments.append(current)
            current = []

        current.append((x, y))

    if current:
        segments.append(current)
    return segments


def sample_surface(ast, extent=5.0, resolution=60):
    """Sample z = f(x, y) on a resolution x resolution grid over [-extent, extent]^2.

    A cell is kept only when all four corners are finite and no corner
    leaves the 2 * extent clamp box.
    """
    if resolution < 1:
        raise ValueError("resolution must be at least 1")

    step = (extent * 2.0) / resolution
    clamp = extent * 2.0
    cells = []

    for ix in range(resolution):
        for iy in range(resolution):
            x0 = -extent + ix * step
            y0 = -extent + iy * step
            x1 = x0 + step
            y1 = y0 + step

            corners = (
                evaluate(ast, x0, y0),
                evaluate(ast, x1, y0),
                evaluate(ast, x0, y1),
                evaluate(ast, x1, y1),
            )
            if not all(math.isfinite(z) for z in corners):
                continue
            if any(abs(z) > clamp for z in corners):
                continue

            cells.append(SurfaceCell(x0, y0, x1, y1, *corners))
    return cells


# -----------------------------
# Workspace
# -----------------------------

class Workspace:
    """The formula list of the plot view: 2-D functions and 3-D surfaces."""

    def __init__(self, capacity=None, max_functions=None):
        if capacity is None:
            capacity = config_manager.load_int_setting("arena_capacity")
        if max_functions is None:
            max_functions = config_manager.load_int_setting("max_functions", minimum=1)

        self.arena = Arena(capacity)
        self.max_functions = max_functions
        self.functions = []
        self.surfaces = []
        self.vectors = []
        self.error_msg = ""

    def reparse_all(self):
        """Reset the shared arena and re-parse every function and surface."""
        self.arena.reset()
        for slot in self.functions + self.surfaces:
            parser = Parser(slot.expr_text, self.arena)
            slot.ast = parser.parse()
            slot.valid = not parser.has_error
            slot.error_message = parser.error_message

    # --- slot list helpers shared by functions and surfaces ---

    def _add(self, slots, prefix, expr):
        if len(slots) >= self.max_functions:
            self.error_msg = E.ERROR_MESSAGES["4002"]
            return False
        self.error_msg = ""

        slot = FunctionSlot(f"{prefix}{len(slots) + 1}", expr)
        slots.append(slot)
        self.reparse_all()

        if not slot.valid:
            # Rejected input never stays in the list
            self.error_msg = slot.error_message
            slots.pop()
            self.reparse_all()
            return False
        return True

    def _update(self, slots, index, expr):
        if index < 0 or index >= len(slots):
            self.error_msg = E.ERROR_MESSAGES["4004"]
            return False
        self.error_msg = ""
        slot = slots[index]
        slot.expr_text = expr[:EXPR_MAX]
        self.reparse_all()
        if not slot.valid:
            self.error_msg = slot.error_message
        return slot.valid

    def _remove(self, slots, prefix, index):
        if index < 0 or index >= len(slots):
            return
        del slots[index]
        for i, slot in enumerate(slots):
            slot.name = f"{prefix}{i + 1}"
        self.reparse_all()

    # --- 2-D functions ---

    def add_function(self, expr):
        return self._add(self.functions, "f", expr)

    def update_function(self, index, expr):
        return self._update(self.functions, index, expr)

    def remove_function(self, index):
        self._remove(self.functions, "f", index)

    # --- 3-D surfaces ---

    def add_surface(self, expr):
        return self._add(self.surfaces, "s", expr)

    def update_surface(self, index, expr):
        return self._update(self.surfaces, index, expr)

    def remove_surface(self, index):
        self._remove(self.surfaces, "s", index)

    # --- 3-D vectors (plain numbers, nothing parsed into the arena) ---

    def add_vector(self, text):
        if len(self.vectors) >= VECTOR_MAX:
            self.error_msg = E.ERROR_MESSAGES["4006"]
            return False
        tip = parse_vector(text)
        if tip is None:
            self.error_msg = E.ERROR_MESSAGES["4005"]
            return False
        self.error_msg = ""
        self.vectors.append(VectorEntry(f"v{len(self.vectors) + 1}", text, *tip))
        return True

    def remove_vector(self, index):
        if index < 0 or index >= len(self.vectors):
            return
        del self.vectors[index]
        for i, vector in enumerate(self.vectors):
            vector.name = f"v{i + 1}"

    # --- sampling of every visible, valid slot ---

    def curves(self, x_min, x_max, steps, max_jump=None):
        return {
            slot.name: sample_curve(slot.ast, x_min, x_max, steps, max_jump)
            for slot in self.functions
            if slot.visible and slot.valid
        }

    def surface_cells(self, extent=None, resolution=None):
        if extent is None:
            extent = float(config_manager.load_setting_value("surface_range"))
        if resolution is None:
            resolution = config_manager.load_int_setting("surface_resolution", minimum=1)
        return {
            slot.name: sample_surface(slot.ast, extent, resolution)
            for slot in self.surfaces
            if slot.visible and slot.valid
        }
