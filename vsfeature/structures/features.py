import numpy as np
from dataclasses import dataclass

@dataclass
class FeaturePoint:
    """点视觉特征 s = (x, y)，深度 Z 用于计算交互矩阵

    x, y 为归一化平面坐标。Z 只有在被设置后才有意义，
    从像素观测构建的特征不会设置 Z，需要调用者另行提供（通常来自位姿估计）。
    """
    x: float = 0.0
    y: float = 0.0
    Z: float = 0.0

    def get_x(self) -> float:
        return self.x

    def get_y(self) -> float:
        return self.y

    def get_Z(self) -> float:
        return self.Z

    def set_x(self, x: float):
        self.x = float(x)

    def set_y(self, y: float):
        self.y = float(y)

    def set_Z(self, Z: float):
        self.Z = float(Z)

    def build_from(self, x: float, y: float, Z: float):
        self.set_x(x)
        self.set_y(y)
        self.set_Z(Z)

    def to_array(self):
        return np.array([self.x, self.y])
