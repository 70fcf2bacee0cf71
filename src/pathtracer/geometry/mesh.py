# pathtracer/geometry/mesh.py
import logging
import os
from typing import Dict, List, Optional, Tuple

from pathtracer.core.vector import Vector3
from pathtracer.geometry.triangle import Triangle
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal

logger = logging.getLogger(__name__)

DEFAULT_MESH_COLOR = Vector3(0.6, 0.6, 0.6)


def _parse_floats(values: List[str], count: int, line_num: int, filename: str) -> List[float]:
    if len(values) < count:
        raise ValueError(f"{filename}:{line_num}: expected {count} numbers, got {len(values)}")
    try:
        return [float(x) for x in values[:count]]
    except ValueError as e:
        raise ValueError(f"{filename}:{line_num}: {e}") from None


def _resolve_index(i: int, count: int, line_num: int, filename: str) -> int:
    """OBJ indices are 1-based; negative indices count back from the end."""
    resolved = i - 1 if i > 0 else count + i
    if i == 0 or not 0 <= resolved < count:
        raise ValueError(f"{filename}:{line_num}: index {i} out of range (have {count})")
    return resolved


def _parse_int(values: List[str], line_num: int, filename: str) -> int:
    if not values:
        raise ValueError(f"{filename}:{line_num}: expected an integer")
    try:
        return int(values[0])
    except ValueError as e:
        raise ValueError(f"{filename}:{line_num}: {e}") from None


# MTL statement: its arguments and the line it came from
MtlEntry = Dict[str, Tuple[List[str], int]]


def _material_from_mtl(entry: MtlEntry, filename: str) -> Material:
    """
    Map an MTL entry onto one of the supported materials:
    illum 7 is glass, illum 5 is a mirror-like metal, anything else is diffuse.
    """
    def number(key: str, default: float) -> float:
        if key not in entry:
            return default
        values, line_num = entry[key]
        return _parse_floats(values, 1, line_num, filename)[0]

    if "Kd" in entry:
        values, line_num = entry["Kd"]
        kd = Vector3(*_parse_floats(values, 3, line_num, filename))
    else:
        kd = Vector3(0.5, 0.5, 0.5)
    illum = _parse_int(*entry["illum"], filename) if "illum" in entry else 2

    if illum == 7:
        ior = number("Ni", 1.5)
        if ior <= 0:
            raise ValueError(f"{filename}:{entry['Ni'][1]}: Ni must be positive, got {ior}")
        return Dielectric(ior)
    if illum == 5:
        shininess = number("Ns", 1.0)
        return Metal(kd, 1.0 / shininess if shininess > 0 else 1.0)
    return Lambertian(kd)


def load_mtl(filename: str) -> Dict[str, Material]:
    """Load the materials of an MTL library, keyed by name."""
    entries: Dict[str, MtlEntry] = {}
    current = None
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue
            if values[0] == 'newmtl':
                current = entries.setdefault(" ".join(values[1:]), {})
            elif current is not None:
                current[values[0]] = (values[1:], line_num)
    return {name: _material_from_mtl(entry, filename) for name, entry in entries.items()}


def load_obj(filename: str, material: Optional[Material] = None,
             smooth: bool = False) -> List[Triangle]:
    """
    Load an OBJ file as a flat list of triangles.

    Polygons are fan-triangulated. Faces take their material from the active
    ``usemtl`` entry when the file references an MTL library, otherwise from
    ``material`` (grey Lambertian when omitted). Materials are shared between
    all triangles that use them. When the file carries vertex normals they
    become the triangle's flat normal (their average), or are interpolated
    across the face if ``smooth`` is set.
    """
    if material is None:
        material = Lambertian(DEFAULT_MESH_COLOR)

    vertices: List[Vector3] = []
    normals: List[Vector3] = []
    uv_count = 0
    face_count = 0
    triangles: List[Triangle] = []
    library: Dict[str, Material] = {}
    active = material
    base_dir = os.path.dirname(filename)

    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue

            keyword = values[0]
            if keyword == 'v':
                vertices.append(Vector3(*_parse_floats(values[1:], 3, line_num, filename)))
            elif keyword == 'vn':
                normals.append(Vector3(*_parse_floats(values[1:], 3, line_num, filename)))
            elif keyword == 'vt':
                uv_count += 1
            elif keyword == 'mtllib':
                for name in values[1:]:
                    library.update(load_mtl(os.path.join(base_dir, name)))
            elif keyword == 'usemtl':
                name = " ".join(values[1:])
                if name not in library:
                    logger.warning("%s:%d: unknown material %r, using default", filename, line_num, name)
                active = library.get(name, material)
            elif keyword == 'f':
                if len(values) < 4:
                    raise ValueError(f"{filename}:{line_num}: face needs at least 3 vertices")
                corners = [_parse_corner(v, len(vertices), len(normals), line_num, filename)
                           for v in values[1:]]
                face_count += 1
                for i in range(1, len(corners) - 1):
                    triangles.append(_make_triangle(
                        (corners[0], corners[i], corners[i + 1]),
                        vertices, normals, active, smooth))

    logger.info("Loaded %s: %d vertices, %d normals, %d UVs, %d faces, %d triangles",
                filename, len(vertices), len(normals), uv_count, face_count, len(triangles))
    return triangles


def _parse_corner(vertex_str: str, vertex_count: int, normal_count: int,
                  line_num: int, filename: str) -> Tuple[int, Optional[int]]:
    indices = vertex_str.split('/')
    try:
        v = int(indices[0])
        n = int(indices[2]) if len(indices) > 2 and indices[2] else None
    except ValueError:
        raise ValueError(f"{filename}:{line_num}: bad face vertex {vertex_str!r}") from None
    v_idx = _resolve_index(v, vertex_count, line_num, filename)
    n_idx = _resolve_index(n, normal_count, line_num, filename) if n is not None else None
    return v_idx, n_idx


def _make_triangle(corners, vertices: List[Vector3], normals: List[Vector3],
                   material: Material, smooth: bool) -> Triangle:
    v0, v1, v2 = (vertices[c[0]] for c in corners)
    if any(c[1] is None for c in corners):
        return Triangle(v0, v1, v2, material)
    vertex_normals = [normals[c[1]] for c in corners]
    if smooth:
        return Triangle(v0, v1, v2, material, vertex_normals=vertex_normals, smooth=True)
    average = vertex_normals[0] + vertex_normals[1] + vertex_normals[2]
    if average.near_zero():
        return Triangle(v0, v1, v2, material)
    return Triangle(v0, v1, v2, material, normal=average)
