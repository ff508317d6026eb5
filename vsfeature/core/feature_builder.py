"""
Feature builder — 由跟踪结果、图像点或三维点构建点视觉特征。

从像素得到的特征只设置 (x, y)，深度 Z 需要调用者另外给出（通常来自位姿估计）。
从三维点得到的特征同时设置 Z = cP[2] / cP[3]，并检查点在相机前方且深度不为 0。
"""

import logging
from ..exceptions import BehindCameraError, DegenerateDepthError
from ..structures.camera import Camera
from ..structures.features import FeaturePoint
from ..structures.points import CentroidSource, ImagePoint, Point
from ..utils.conversions import meter_to_pixel, pixel_to_meter, pixel_to_meter_uv

logger = logging.getLogger(__name__)

DEPTH_EPSILON = 1e-6

def create_from_tracker(s: FeaturePoint, camera: Camera, tracker: CentroidSource) -> FeaturePoint:
    """由跟踪器的重心和相机参数构建特征，不设置 Z"""
    try:
        cog = tracker.get_cog()
        x, y = pixel_to_meter(camera, cog)
    except Exception as e:
        logger.error("Error caught while building feature from tracker: %s", e)
        raise

    s.set_x(x)
    s.set_y(y)
    return s

def create_from_image_point(s: FeaturePoint, camera: Camera, ip: ImagePoint) -> FeaturePoint:
    """由图像点和相机参数构建特征，不设置 Z"""
    try:
        x, y = pixel_to_meter(camera, ip)
    except Exception as e:
        logger.error("Error caught while building feature from image point: %s", e)
        raise

    s.set_x(x)
    s.set_y(y)
    return s

def create_from_point(s: FeaturePoint, point: Point) -> FeaturePoint:
    """由三维点构建特征

    point 的 p 和 cP 必须已经计算好并且互相一致。
    """
    s.set_x(point.p[0])
    s.set_y(point.p[1])
    s.set_Z(point.cP[2] / point.cP[3])

    # 先检查符号，再检查是否接近 0
    if s.get_Z() < 0:
        logger.error("Point is behind the camera, Z = %s", s.get_Z())
        raise BehindCameraError(s.get_Z())

    # NaN 也视为无效深度
    if not abs(s.get_Z()) >= DEPTH_EPSILON:
        logger.error("Point Z coordinate is null, Z = %s", s.get_Z())
        raise DegenerateDepthError(s.get_Z())

    return s

def create_from_point_with_noise(s: FeaturePoint, good_camera: Camera, wrong_camera: Camera,
                                 point: Point) -> FeaturePoint:
    """由三维点构建特征，并引入标定误差

    (x, y) 先用 good_camera 投影到像素，再用 wrong_camera 转换回归一化平面。
    Z 直接取自三维点，不做深度检查。
    """
    x = point.p[0]
    y = point.p[1]

    s.set_Z(point.cP[2] / point.cP[3])

    try:
        u, v = meter_to_pixel(good_camera, x, y)
        x, y = pixel_to_meter_uv(wrong_camera, u, v)
    except Exception as e:
        logger.error("Error caught while adding calibration noise: %s", e)
        raise

    s.set_x(x)
    s.set_y(y)
    return s

def create(s: FeaturePoint, *args) -> FeaturePoint:
    """按参数类型选择构建方式

    create(s, camera, tracker)
    create(s, camera, image_point)
    create(s, point)
    create(s, good_camera, wrong_camera, point)
    """
    if len(args) == 1 and isinstance(args[0], Point):
        return create_from_point(s, args[0])

    if len(args) == 2 and isinstance(args[0], Camera):
        source = args[1]
        if isinstance(source, ImagePoint):
            return create_from_image_point(s, args[0], source)
        if hasattr(source, "get_cog"):
            return create_from_tracker(s, args[0], source)

    if (len(args) == 3 and isinstance(args[0], Camera) and isinstance(args[1], Camera)
            and isinstance(args[2], Point)):
        return create_from_point_with_noise(s, args[0], args[1], args[2])

    raise TypeError(
        "Unsupported arguments for create(): "
        + ", ".join(type(a).__name__ for a in args)
    )
