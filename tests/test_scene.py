"""Tests for the simulated scene."""

import pytest

from vsfeature.core.scene import Scene
from vsfeature.exceptions import BehindCameraError

SCENE_XML = """<?xml version="1.0" encoding="utf-8"?>
<SceneDocument>
  <Scene>
    <Camera>
      <Fx>600</Fx>
      <Fy>580</Fy>
      <PrincipalPoint><x>320</x><y>240</y></PrincipalPoint>
      <Distortion><K1>-0.1</K1><K2>0.01</K2><P1>0</P1><P2>0</P2></Distortion>
    </Camera>
    <Pose>
      <Rotation>
        <M_00>1</M_00><M_01>0</M_01><M_02>0</M_02>
        <M_10>0</M_10><M_11>1</M_11><M_12>0</M_12>
        <M_20>0</M_20><M_21>0</M_21><M_22>1</M_22>
      </Rotation>
      <Translation><x>0</x><y>0</y><z>2</z></Translation>
    </Pose>
    <Points>
      <Point><x>0.1</x><y>0.2</y><z>0</z></Point>
      <Point><x>-0.2</x><y>0.1</y><z>0.5</z></Point>
      <Point><x>0</x><y>0</y><z>-1</z></Point>
    </Points>
  </Scene>
</SceneDocument>
"""


@pytest.fixture
def scene_path(tmp_path):
    p = tmp_path / "scene.xml"
    p.write_text(SCENE_XML)
    return str(p)


@pytest.fixture
def scene(scene_path):
    s = Scene()
    assert s.load_from_xml(scene_path)
    return s


def test_load_camera(scene):
    K = scene.camera.intrinsic
    assert (K.fx, K.fy, K.cx, K.cy) == (600.0, 580.0, 320.0, 240.0)
    assert scene.camera.k1 == -0.1
    assert scene.camera.k2 == 0.01
    assert scene.camera.has_distortion


def test_load_pose_and_points(scene):
    assert scene.translation.z == 2.0
    assert len(scene.world_points) == 3


def test_points_are_in_camera_frame(scene):
    points = scene.points()
    assert points[0].get_Z() == pytest.approx(2.0)
    assert points[0].get_x() == pytest.approx(0.05)
    assert points[1].get_Z() == pytest.approx(2.5)


def test_build_features(scene):
    features = scene.build_features()
    assert [s.get_Z() for s in features] == pytest.approx([2.0, 2.5, 1.0])
    assert features[0].get_x() == pytest.approx(0.05)
    assert features[1].get_y() == pytest.approx(0.04)


def test_build_features_with_noise(scene):
    exact = scene.build_features()
    noisy = scene.build_features(scene.camera.perturbed(scale=1.05, offset=3.0))
    assert [s.get_Z() for s in noisy] == [s.get_Z() for s in exact]
    assert noisy[0].get_x() != pytest.approx(exact[0].get_x(), abs=1e-6)


def test_observe_matches_ground_truth(scene):
    exact = scene.build_features()
    observed = scene.observe()
    for s_exact, s_observed in zip(exact, observed):
        assert s_observed.get_x() == pytest.approx(s_exact.get_x(), abs=1e-6)
        assert s_observed.get_y() == pytest.approx(s_exact.get_y(), abs=1e-6)
        assert s_observed.get_Z() == s_exact.get_Z()


def test_point_behind_camera_fails_build(scene):
    scene.translation.z = 0.5
    with pytest.raises(BehindCameraError):
        scene.build_features()


def test_load_rejects_document_without_scene(tmp_path):
    p = tmp_path / "empty.xml"
    p.write_text("<Block></Block>")
    assert not Scene().load_from_xml(str(p))


def test_load_rejects_malformed_xml(tmp_path):
    p = tmp_path / "broken.xml"
    p.write_text("<Scene><Camera>")
    assert not Scene().load_from_xml(str(p))


def test_load_rejects_incomplete_camera(tmp_path):
    p = tmp_path / "camera.xml"
    p.write_text("<Scene><Camera><FocalLength>500</FocalLength></Camera></Scene>")
    assert not Scene().load_from_xml(str(p))


def test_load_missing_file(tmp_path):
    assert not Scene().load_from_xml(str(tmp_path / "missing.xml"))


def test_loading_twice_does_not_duplicate_points(scene, scene_path):
    assert scene.load_from_xml(scene_path)
    assert len(scene.world_points) == 3


def test_failed_load_leaves_scene_unchanged(scene, tmp_path):
    camera = scene.camera
    translation = scene.translation
    # camera and pose parse, the second point is missing its z coordinate
    p = tmp_path / "partial.xml"
    p.write_text(
        "<Scene>"
        "<Camera><FocalLength>500</FocalLength>"
        "<PrincipalPoint><x>100</x><y>100</y></PrincipalPoint></Camera>"
        "<Pose><Translation><x>0</x><y>0</y><z>5</z></Translation></Pose>"
        "<Points><Point><x>0</x><y>0</y><z>0</z></Point>"
        "<Point><x>1</x><y>1</y></Point></Points>"
        "</Scene>"
    )
    assert not scene.load_from_xml(str(p))
    assert scene.camera is camera
    assert scene.translation is translation
    assert len(scene.world_points) == 3
