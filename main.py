from vsfeature.config.settings import Settings, configure_logging, set_settings
from vsfeature.core.feature_builder import create
from vsfeature.core.scene import Scene
from vsfeature.exceptions import FeatureError
from vsfeature.structures.camera import Camera
from vsfeature.structures.features import FeaturePoint
from vsfeature.structures.points import ImagePoint, Point
import os
import sys
from typing import List

def show_menu():
    """显示菜单选项"""
    print("\n=== 点视觉特征构建程序 ===")
    print("1. 由像素坐标构建特征")
    print("2. 由三维点构建特征")
    print("3. 由三维点构建特征 (标定噪声)")
    print("4. 加载场景并构建特征")
    print("0. 退出")
    print("请选择操作: ", end='')

def display_feature(s: FeaturePoint, label: str = ""):
    """显示特征信息"""
    prefix = f"{label}: " if label else ""
    print(f"{prefix}x = {s.get_x():.6f}, y = {s.get_y():.6f}, Z = {s.get_Z():.6f}")

def display_features(features: List[FeaturePoint], limit: int = 20):
    print(f"\n=== 特征信息（前{limit}个） ===")
    for i, s in enumerate(features[:limit]):
        display_feature(s, f"特征 #{i + 1}")

def read_floats(prompt: str, count: int) -> List[float]:
    values = [float(v) for v in input(prompt).replace(',', ' ').split()]
    if len(values) != count:
        raise ValueError(f"需要{count}个数值")
    return values

def read_point() -> Point:
    X, Y, Z, W = read_floats("请输入相机坐标系下的齐次坐标 X Y Z W: ", 4)
    point = Point(cP=[X, Y, Z, W])
    point.project()
    return point

def process_pixel(camera: Camera):
    u, v = read_floats("请输入像素坐标 u v: ", 2)
    s = create(FeaturePoint(), camera, ImagePoint.from_uv(u, v))
    display_feature(s)
    print("注意: Z 需要由位姿估计另行给出")

def process_point(camera: Camera, noisy_camera: Camera = None):
    point = read_point()
    if noisy_camera is None:
        s = create(FeaturePoint(), point)
    else:
        s = create(FeaturePoint(), camera, noisy_camera, point)
    display_feature(s)

def process_scene(settings: Settings):
    xml_path = input("请输入场景XML文件路径: ").strip()
    if not os.path.exists(xml_path):
        print(f"错误：找不到XML文件: {xml_path}")
        return

    scene = Scene()
    if not scene.load_from_xml(xml_path):
        print("无法加载XML文件")
        return

    print(f"场景中共有{len(scene.world_points)}个点")
    display_features(scene.build_features())
    print("\n加入标定噪声后:")
    noisy_camera = scene.camera.perturbed(settings.noise_focal_scale, settings.noise_center_offset)
    display_features(scene.build_features(noisy_camera))

def main():
    """主程序入口"""
    settings_path = sys.argv[1] if len(sys.argv) > 1 else "vsfeature_settings.json"
    settings = Settings.load(settings_path)
    set_settings(settings)
    configure_logging(settings)

    camera = Camera.from_params(
        settings.default_fx, settings.default_fy,
        settings.default_cx, settings.default_cy
    )
    noisy_camera = camera.perturbed(settings.noise_focal_scale, settings.noise_center_offset)

    while True:
        show_menu()
        try:
            choice = int(input())

            if choice == 0:
                print("程序退出")
                break
            elif choice == 1:
                process_pixel(camera)
            elif choice == 2:
                process_point(camera)
            elif choice == 3:
                process_point(camera, noisy_camera)
            elif choice == 4:
                process_scene(settings)
            else:
                print("无效的选择，请重试")

        except ValueError as e:
            print(f"请输入有效的数字 ({e})")
        except FeatureError as e:
            print(f"特征构建失败: {e}")
        except KeyboardInterrupt:
            print("\n程序被用户中断")
            break

if __name__ == "__main__":
    main()
