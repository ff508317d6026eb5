class FeatureError(Exception):
    """视觉特征相关错误的基类"""

class FeatureInitializationError(FeatureError):
    """特征初始化失败"""

class BehindCameraError(FeatureInitializationError):
    """点在相机后方 (Z < 0)"""

    def __init__(self, Z: float):
        super().__init__(f"Point is behind the camera (Z = {Z})")
        self.Z = Z

class DegenerateDepthError(FeatureInitializationError):
    """点的深度接近 0，交互矩阵中 1/Z 无意义"""

    def __init__(self, Z: float):
        super().__init__(f"Point Z coordinate is null (Z = {Z})")
        self.Z = Z

class CameraModelInversionError(FeatureError):
    """无法将像素坐标转换为归一化平面坐标"""
