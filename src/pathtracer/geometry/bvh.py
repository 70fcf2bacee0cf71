# pathtracer/geometry/bvh.py
import functools
import logging
from typing import List, Optional, Sequence, Tuple

from pathtracer.core.aabb import AABB
from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import HitRecord, Hittable

logger = logging.getLogger(__name__)


class BVHBuildError(ValueError):
    """Raised when a BVH cannot be built from the given objects."""


def _bounding_box_or_raise(obj: Hittable, time0: float, time1: float) -> AABB:
    box = obj.bounding_box(time0, time1)
    if box is None:
        raise BVHBuildError(f"No bounding box for {obj!r}; unbounded objects cannot be placed in a BVH")
    return box


def _split_axis(boxed: Sequence[Tuple[AABB, Hittable]]) -> int:
    """Axis along which the objects' boxes span the largest range; x, then y, then z on ties."""
    bounds = functools.reduce(AABB.surrounding_box, (box for box, _ in boxed))
    return max(range(3), key=bounds.extent)


class BVHNode(Hittable):
    """
    Bounding volume hierarchy over a collection of hittables.

    Each node is either a leaf holding exactly one object or a branch with a
    left and a right subtree; the node's box bounds everything below it and
    is computed once at build time. The tree is read-only after construction.
    """
    def __init__(self, objects: Sequence[Hittable], time0: float = 0.0, time1: float = 0.0):
        if len(objects) == 0:
            raise BVHBuildError("Cannot build a BVH from an empty object list")
        boxed = [(_bounding_box_or_raise(obj, time0, time1), obj) for obj in objects]
        self._build(boxed)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Built BVH over %d objects (%d nodes, depth %d)",
                         len(boxed), self.node_count(), self.depth())

    @classmethod
    def _from_boxed(cls, boxed: List[Tuple[AABB, Hittable]]) -> "BVHNode":
        node = cls.__new__(cls)
        node._build(boxed)
        return node

    def _build(self, boxed: List[Tuple[AABB, Hittable]]):
        axis = _split_axis(boxed)
        # Sort by box midpoint along the split axis (min + max keeps the order)
        boxed.sort(key=lambda item: item[0].minimum[axis] + item[0].maximum[axis])

        if len(boxed) == 1:
            self.box, self.object = boxed[0]
            self.left = self.right = None
            self.is_leaf = True
            return

        mid = len(boxed) // 2
        self.left = BVHNode._from_boxed(boxed[:mid])
        self.right = BVHNode._from_boxed(boxed[mid:])
        self.box = AABB.surrounding_box(self.left.box, self.right.box)
        self.object = None
        self.is_leaf = False

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not self.box.hit(ray, t_min, t_max):
            return None

        if self.is_leaf:
            return self.object.hit(ray, t_min, t_max)

        hit_left = self.left.hit(ray, t_min, t_max)

        # A left hit bounds the search in the right subtree, so any right
        # hit is necessarily the closer one.
        if hit_left is not None:
            t_max = hit_left.t

        hit_right = self.right.hit(ray, t_min, t_max)
        return hit_right if hit_right is not None else hit_left

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        return self.box

    def node_count(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + self.left.node_count() + self.right.node_count()

    def depth(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + max(self.left.depth(), self.right.depth())

    def leaves(self) -> List[Hittable]:
        """Objects held by the leaves, left to right."""
        if self.is_leaf:
            return [self.object]
        return self.left.leaves() + self.right.leaves()

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"BVHNode(leaf={self.object!r})"
        return f"BVHNode(box={self.box!r}, nodes={self.node_count()})"
