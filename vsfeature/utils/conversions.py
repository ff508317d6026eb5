import logging
import numpy as np
import cv2
from typing import Tuple
from ..config.settings import get_settings
from ..exceptions import CameraModelInversionError
from ..structures.camera import Camera
from ..structures.points import ImagePoint

logger = logging.getLogger(__name__)

def _check_intrinsics(camera: Camera):
    K = camera.intrinsic
    if not np.all(np.isfinite(K.data)):
        raise CameraModelInversionError("Camera intrinsic matrix has non-finite values")
    if K.fx == 0 or K.fy == 0:
        raise CameraModelInversionError(
            f"Camera intrinsic matrix is singular (fx = {K.fx}, fy = {K.fy})"
        )

def pixel_to_meter_uv(camera: Camera, u: float, v: float) -> Tuple[float, float]:
    """像素坐标 (u, v) 转换为去畸变后的归一化平面坐标 (x, y)"""
    _check_intrinsics(camera)
    K = camera.intrinsic

    if not camera.has_distortion:
        return (u - K.cx) / K.fx, (v - K.cy) / K.fy

    settings = get_settings()
    criteria = (
        cv2.TERM_CRITERIA_COUNT | cv2.TERM_CRITERIA_EPS,
        settings.undistort_max_iter,
        settings.undistort_eps,
    )
    points = np.array([[[u, v]]], dtype=np.float64)
    try:
        # 不给 P 时输出即为归一化坐标
        undistorted = cv2.undistortPointsIter(
            points, K.data, camera.dist_coeffs(), None, None, criteria
        )
    except cv2.error as e:
        raise CameraModelInversionError(f"Undistortion failed: {e}") from e

    x, y = undistorted.reshape(2)
    if not (np.isfinite(x) and np.isfinite(y)):
        raise CameraModelInversionError(f"Undistortion of ({u}, {v}) did not converge")
    return float(x), float(y)

def pixel_to_meter(camera: Camera, ip: ImagePoint) -> Tuple[float, float]:
    """图像点转换为归一化平面坐标"""
    return pixel_to_meter_uv(camera, ip.u, ip.v)

def meter_to_pixel(camera: Camera, x: float, y: float) -> Tuple[float, float]:
    """归一化平面坐标 (x, y) 投影到像素坐标 (u, v)，包含畸变"""
    K = camera.intrinsic

    if not camera.has_distortion:
        return K.cx + K.fx * x, K.cy + K.fy * y

    object_points = np.array([[x, y, 1.0]], dtype=np.float64)
    image_points, _ = cv2.projectPoints(
        object_points, np.zeros(3), np.zeros(3), K.data, camera.dist_coeffs()
    )
    u, v = image_points.reshape(2)
    return float(u), float(v)

def meter_to_image_point(camera: Camera, x: float, y: float) -> ImagePoint:
    u, v = meter_to_pixel(camera, x, y)
    return ImagePoint.from_uv(u, v)
