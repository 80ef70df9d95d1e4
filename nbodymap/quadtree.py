"""Barnes-Hut style quad tree over layout nodes."""

import math
import random
from dataclasses import dataclass, field
from typing import Any, Sequence

_MIN_CELL = 1e-10


class QuadTreeError(RuntimeError):
    """The tree cannot be built, e.g. because node positions are not finite."""


@dataclass(eq=False)
class QuadTreeNode:
    """A square cell: a leaf holding one item, or an internal node.

    ``num_items`` is 1 for a leaf. ``x`` and ``y`` are the centre of mass,
    ``mass`` the total mass of the cell. ``children`` holds the quadrants
    in the order low-y/low-x, low-y/high-x, high-y/low-x, high-y/high-x.
    """

    parent: "QuadTreeNode | None"
    side_length: float
    num_items: int
    mass: float
    x: float
    y: float
    radius: float = 0.0
    item: Any = None
    children: list["QuadTreeNode | None"] = field(default_factory=lambda: [None] * 4)


class QuadTree:
    """A quad tree rebuilt from a list of nodes with ``x``, ``y``, ``mass`` and ``radius``."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.root: QuadTreeNode | None = None
        self.min_x = 0.0
        self.min_y = 0.0
        self.max_x = 0.0
        self.max_y = 0.0

    def build(self, nodes: Sequence[Any]) -> None:
        """Rebuild the tree over ``nodes`` inside their squared bounding box.

        Nodes that cannot be separated within the minimum cell size are
        nudged by a small random amount and left out of this build.
        """
        self.root = None
        if not nodes:
            self.min_x = self.min_y = self.max_x = self.max_y = 0.0
            return

        first = nodes[0]
        min_x = max_x = first.x
        min_y = max_y = first.y
        for n in nodes[1:]:
            if n.x < min_x:
                min_x = n.x
            if n.y < min_y:
                min_y = n.y
            if n.x > max_x:
                max_x = n.x
            if n.y > max_y:
                max_y = n.y

        dx = max_x - min_x
        dy = max_y - min_y
        if dx > dy:
            cen_y = 0.5 * (min_y + max_y)
            min_y, max_y = cen_y - 0.5 * dx, cen_y + 0.5 * dx
        else:
            cen_x = 0.5 * (min_x + max_x)
            min_x, max_x = cen_x - 0.5 * dy, cen_x + 0.5 * dy

        if not all(math.isfinite(v) for v in (min_x, min_y, max_x, max_y)):
            raise QuadTreeError("quad tree bounds are not finite")

        self.min_x, self.min_y, self.max_x, self.max_y = min_x, min_y, max_x, max_y
        for n in nodes:
            self.root = self._insert(None, self.root, n, min_x, min_y, max_x, max_y)

    def _insert(
        self,
        parent: QuadTreeNode | None,
        cell: QuadTreeNode | None,
        item: Any,
        min_x: float,
        min_y: float,
        max_x: float,
        max_y: float,
    ) -> QuadTreeNode:
        if cell is None:
            return QuadTreeNode(
                parent=parent,
                side_length=max_x - min_x,
                num_items=1,
                mass=item.mass,
                x=item.x,
                y=item.y,
                radius=item.radius,
                item=item,
            )

        if cell.num_items == 1:
            # split the leaf into an internal node and re-insert both items
            previous = cell.item
            cell.item = None
            cell.radius = 0.0
            cell.mass = 0.0
            cell.x = 0.0
            cell.y = 0.0
            cell.children = [None] * 4
            cell.num_items = 0
            self._insert(parent, cell, previous, min_x, min_y, max_x, max_y)
            cell.num_items = 0
            self._insert(parent, cell, item, min_x, min_y, max_x, max_y)
            cell.num_items = 2
            return cell

        if abs(min_x - max_x) < _MIN_CELL or abs(min_y - max_y) < _MIN_CELL:
            item.x += 0.1 * (self.rng.random() - 0.5)
            item.y += 0.1 * (self.rng.random() - 0.5)
            return cell

        cell.num_items += 1
        new_mass = cell.mass + item.mass
        cell.x = (cell.mass * cell.x + item.mass * item.x) / new_mass
        cell.y = (cell.mass * cell.y + item.mass * item.y) / new_mass
        cell.mass = new_mass

        mid_x = 0.5 * (min_x + max_x)
        mid_y = 0.5 * (min_y + max_y)
        if item.y < mid_y:
            if item.x < mid_x:
                quadrant, bounds = 0, (min_x, min_y, mid_x, mid_y)
            else:
                quadrant, bounds = 1, (mid_x, min_y, max_x, mid_y)
        else:
            if item.x < mid_x:
                quadrant, bounds = 2, (min_x, mid_y, mid_x, max_y)
            else:
                quadrant, bounds = 3, (mid_x, mid_y, max_x, max_y)
        cell.children[quadrant] = self._insert(
            cell, cell.children[quadrant], item, *bounds
        )
        return cell