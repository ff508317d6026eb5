import numpy as np
from dataclasses import dataclass, field
from .matrices import Mat_K

@dataclass(frozen=True)
class Camera:
    """相机参数（内参 + 畸变系数）"""
    intrinsic: Mat_K = field(default_factory=Mat_K)
    k1: float = 0.0
    k2: float = 0.0
    p1: float = 0.0
    p2: float = 0.0
    k3: float = 0.0

    @classmethod
    def from_params(cls, fx: float, fy: float, cx: float, cy: float, **distortion) -> "Camera":
        return cls(Mat_K.from_params(fx, fy, cx, cy), **distortion)

    def dist_coeffs(self) -> np.ndarray:
        """OpenCV 顺序的畸变系数 [k1, k2, p1, p2, k3]"""
        return np.array([self.k1, self.k2, self.p1, self.p2, self.k3], dtype=float)

    @property
    def has_distortion(self) -> bool:
        return bool(np.any(self.dist_coeffs() != 0.0))

    def perturbed(self, scale: float = 1.0, offset: float = 0.0) -> "Camera":
        """返回带标定误差的相机：焦距乘以 scale，主点平移 offset 像素"""
        K = self.intrinsic
        return Camera(
            Mat_K.from_params(K.fx * scale, K.fy * scale, K.cx + offset, K.cy + offset),
            k1=self.k1, k2=self.k2, p1=self.p1, p2=self.p2, k3=self.k3
        )
