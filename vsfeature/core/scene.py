import logging
import xml.etree.ElementTree as ET
import numpy as np
from typing import List, Optional
from ..structures.camera import Camera
from ..structures.features import FeaturePoint
from ..structures.matrices import Mat_K, Mat_R
from ..structures.points import Dot, Point
from ..structures.vectors import Vec_t
from ..utils.conversions import meter_to_image_point
from .feature_builder import (
    create_from_point,
    create_from_point_with_noise,
    create_from_tracker
)

logger = logging.getLogger(__name__)

class Scene:
    """仿真场景：相机、相机位姿（世界坐标系到相机坐标系）和一组世界坐标系下的点"""

    def __init__(self, camera: Optional[Camera] = None):
        self.camera = camera if camera is not None else Camera()
        self.rotation = Mat_R()
        self.translation = Vec_t(0.0, 0.0, 0.0)
        self.world_points: List[Vec_t] = []

    def load_from_xml(self, filename: str) -> bool:
        try:
            tree = ET.parse(filename)
            root = tree.getroot()
            scene_elem = root if root.tag == 'Scene' else root.find('Scene')
            if scene_elem is None:
                logger.error("No <Scene> element in %s", filename)
                return False

            # 读取相机参数
            camera = self.camera
            camera_elem = scene_elem.find('Camera')
            if camera_elem is not None:
                camera = self._parse_camera(camera_elem)

            # 读取相机位姿
            rotation, translation = self.rotation, self.translation
            pose = scene_elem.find('Pose')
            if pose is not None:
                rotation, translation = self._parse_pose(pose)

            # 读取三维点
            world_points = []
            points_elem = scene_elem.find('Points')
            if points_elem is not None:
                for point in points_elem.findall('Point'):
                    world_points.append(self._parse_vec(point))

        except (ET.ParseError, OSError, AttributeError, ValueError) as e:
            logger.error("Failed to load scene from %s: %s", filename, e)
            return False

        # 全部解析成功后再替换场景内容
        self.camera = camera
        self.rotation = rotation
        self.translation = translation
        self.world_points = world_points
        return True

    def _parse_camera(self, camera_elem) -> Camera:
        focal = camera_elem.find('FocalLength')
        if focal is not None:
            fx = fy = float(focal.text)
        else:
            fx = float(camera_elem.find('Fx').text)
            fy = float(camera_elem.find('Fy').text)
        pp = camera_elem.find('PrincipalPoint')
        cx = float(pp.find('x').text)
        cy = float(pp.find('y').text)

        # 读取畸变参数
        distortion = {}
        distortion_elem = camera_elem.find('Distortion')
        if distortion_elem is not None:
            for name in ('K1', 'K2', 'P1', 'P2', 'K3'):
                elem = distortion_elem.find(name)
                if elem is not None:
                    distortion[name.lower()] = float(elem.text)

        return Camera(Mat_K.from_params(fx, fy, cx, cy), **distortion)

    def _parse_pose(self, pose_elem):
        rot_matrix = np.eye(3)
        rotation = pose_elem.find('Rotation')
        if rotation is not None:
            for i in range(3):
                for j in range(3):
                    elem = rotation.find(f'M_{i}{j}')
                    rot_matrix[i][j] = float(elem.text)

        translation = Vec_t(0.0, 0.0, 0.0)
        translation_elem = pose_elem.find('Translation')
        if translation_elem is not None:
            translation = self._parse_vec(translation_elem)

        return Mat_R(rot_matrix), translation

    @staticmethod
    def _parse_vec(elem) -> Vec_t:
        return Vec_t(
            float(elem.find('x').text),
            float(elem.find('y').text),
            float(elem.find('z').text)
        )

    def points(self) -> List[Point]:
        """世界坐标系下的点变换到相机坐标系并投影"""
        points = []
        for position in self.world_points:
            point = Point.from_world(position)
            point.track(self.rotation, self.translation)
            points.append(point)
        return points

    def build_features(self, noisy_camera: Optional[Camera] = None) -> List[FeaturePoint]:
        """由三维点构建特征；给出 noisy_camera 时引入标定误差"""
        features = []
        for point in self.points():
            s = FeaturePoint()
            if noisy_camera is None:
                create_from_point(s, point)
            else:
                create_from_point_with_noise(s, self.camera, noisy_camera, point)
            features.append(s)
        return features

    def observe(self, noisy_camera: Optional[Camera] = None) -> List[FeaturePoint]:
        """模拟跟踪器：点投影到图像后再由像素构建特征，Z 取自三维点"""
        camera = noisy_camera if noisy_camera is not None else self.camera
        features = []
        for point in self.points():
            dot = Dot(meter_to_image_point(self.camera, point.get_x(), point.get_y()))
            s = FeaturePoint()
            create_from_tracker(s, camera, dot)
            s.set_Z(point.get_Z())
            features.append(s)
        return features
