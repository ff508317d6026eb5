import numpy as np
from dataclasses import dataclass, field

@dataclass
class Mat_K:
    """相机内参矩阵"""
    data: np.ndarray = field(default_factory=lambda: np.eye(3))

    def __post_init__(self):
        if isinstance(self.data, list):
            self.data = np.array(self.data, dtype=float)

    def __eq__(self, other):
        if not isinstance(other, Mat_K):
            return NotImplemented
        return np.array_equal(self.data, other.data)

    @classmethod
    def from_params(cls, fx: float, fy: float, cx: float, cy: float) -> "Mat_K":
        return cls(np.array([
            [fx, 0, cx],
            [0, fy, cy],
            [0, 0, 1]
        ], dtype=float))

    @property
    def fx(self) -> float:
        return float(self.data[0, 0])

    @property
    def fy(self) -> float:
        return float(self.data[1, 1])

    @property
    def cx(self) -> float:
        return float(self.data[0, 2])

    @property
    def cy(self) -> float:
        return float(self.data[1, 2])

@dataclass
class Mat_R:
    """旋转矩阵"""
    data: np.ndarray = field(default_factory=lambda: np.eye(3))

    def __post_init__(self):
        if isinstance(self.data, list):
            self.data = np.array(self.data, dtype=float)

    def __eq__(self, other):
        if not isinstance(other, Mat_R):
            return NotImplemented
        return np.array_equal(self.data, other.data)
