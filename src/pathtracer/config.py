# pathtracer/config.py
"""Render settings, loadable from a JSON file and overridable from the command line."""
import json
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union, get_args, get_origin

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3

Triple = Tuple[float, float, float]


@dataclass
class CameraConfig:
    lookfrom: Triple = (13.0, 2.0, 3.0)
    lookat: Triple = (0.0, 0.0, 0.0)
    vup: Triple = (0.0, 1.0, 0.0)
    vfov: float = 45.0
    aperture: float = 0.1
    focus_dist: float = 10.0
    time0: float = 0.0
    time1: float = 1.0

    def build(self, aspect_ratio: float) -> Camera:
        return Camera(Vector3(*self.lookfrom), Vector3(*self.lookat), Vector3(*self.vup),
                      self.vfov, aspect_ratio, self.aperture, self.focus_dist,
                      self.time0, self.time1)


@dataclass
class RenderConfig:
    width: int = 400
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel: int = 25
    max_depth: int = 50
    workers: Optional[int] = None
    seed: Optional[int] = None
    scene: str = "demo"
    obj: Optional[str] = None
    output: str = "render.png"
    camera: CameraConfig = field(default_factory=CameraConfig)

    @property
    def height(self) -> int:
        return max(1, int(self.width / self.aspect_ratio))

    def validate(self):
        for name in ("width", "samples_per_pixel", "max_depth"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")


def _check_keys(data: Dict[str, Any], cls, where: str):
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {where} setting(s): {', '.join(sorted(unknown))}")


def _is_number(value) -> bool:
    # JSON true/false load as bool, which is an int subclass
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _triple(value, name: str) -> Triple:
    if not isinstance(value, (list, tuple)) or len(value) != 3 or not all(_is_number(x) for x in value):
        raise ValueError(f"{name} must be a list of 3 numbers, got {value!r}")
    return tuple(float(x) for x in value)


def _typed(value, expected, name: str):
    """Check a JSON value against a field annotation: int, float, str or Optional of one."""
    if get_origin(expected) is Union:
        if value is None:
            return None
        expected = next(arg for arg in get_args(expected) if arg is not type(None))
    if expected is int and _is_number(value) and isinstance(value, int):
        return value
    if expected is float and _is_number(value):
        return float(value)
    if expected is str and isinstance(value, str):
        return value
    raise ValueError(f"{name} must be of type {expected.__name__}, got {value!r}")


def _typed_fields(data: Dict[str, Any], cls, prefix: str = "") -> Dict[str, Any]:
    _check_keys(data, cls, prefix.rstrip(".") or "render")
    typed = {}
    for f in fields(cls):
        if f.name not in data or is_dataclass(f.type):
            continue
        name = prefix + f.name
        if f.type == Triple:
            typed[f.name] = _triple(data[f.name], name)
        else:
            typed[f.name] = _typed(data[f.name], f.type, name)
    return typed


def config_from_dict(data: Dict[str, Any]) -> RenderConfig:
    """Build a validated RenderConfig from parsed JSON, rejecting unknown keys and mistyped values."""
    camera_data = data.get("camera", {})
    if not isinstance(camera_data, dict):
        raise ValueError(f"camera must be an object, got {camera_data!r}")
    camera = CameraConfig(**_typed_fields(camera_data, CameraConfig, "camera."))
    config = RenderConfig(camera=camera, **_typed_fields(data, RenderConfig))
    config.validate()
    return config


def load_config(path: Union[str, Path]) -> RenderConfig:
    """Load a RenderConfig from a JSON file; missing keys keep their defaults."""
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{path}: invalid JSON: {e}") from None
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object at top level")
    return config_from_dict(data)
