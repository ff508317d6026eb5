import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Protocol
from .matrices import Mat_R
from .vectors import Vec_t
from ..utils.transformations import change_frame, perspective_projection

@dataclass
class ImagePoint:
    """图像点，(i, j) 为 (行, 列) 像素坐标"""
    i: float
    j: float

    @property
    def u(self) -> float:
        return self.j

    @property
    def v(self) -> float:
        return self.i

    @classmethod
    def from_uv(cls, u: float, v: float) -> "ImagePoint":
        return cls(i=v, j=u)

    def to_array(self):
        return np.array([self.u, self.v])

class CentroidSource(Protocol):
    """跟踪器输出：能给出当前重心像素位置的对象"""

    def get_cog(self) -> ImagePoint:
        ...

@dataclass
class Dot:
    """跟踪到的圆点（只保存重心）"""
    cog: ImagePoint
    area: float = 0.0

    def get_cog(self) -> ImagePoint:
        return self.cog

@dataclass
class Point:
    """三维点

    oP: 物体（世界）坐标系下的齐次坐标
    cP: 相机坐标系下的齐次坐标 [X, Y, Z, W]
    p:  归一化平面上的投影 [x, y, 1]
    """
    cP: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 0.0, 1.0]))
    p: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, 1.0]))
    oP: Optional[np.ndarray] = None

    def __post_init__(self):
        self.cP = np.asarray(self.cP, dtype=float)
        p = np.asarray(self.p, dtype=float)
        if p.shape == (2,):
            p = np.append(p, 1.0)
        self.p = p
        if self.oP is not None:
            self.oP = np.asarray(self.oP, dtype=float)

    @classmethod
    def from_world(cls, position: Vec_t) -> "Point":
        return cls(oP=position.to_homogeneous())

    def get_x(self) -> float:
        return float(self.p[0])

    def get_y(self) -> float:
        return float(self.p[1])

    def get_Z(self) -> float:
        return float(self.cP[2] / self.cP[3])

    def change_frame(self, R: Mat_R, t: Vec_t):
        """由 oP 计算相机坐标系下的 cP"""
        if self.oP is None:
            raise ValueError("Point has no object frame coordinates")
        self.cP = change_frame(R.data, t.to_array(), self.oP)

    def project(self):
        """由 cP 计算归一化平面投影 p"""
        self.p = perspective_projection(self.cP)

    def track(self, R: Mat_R, t: Vec_t):
        self.change_frame(R, t)
        self.project()
