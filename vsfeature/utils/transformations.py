import numpy as np

def change_frame(R: np.ndarray, t: np.ndarray, oP: np.ndarray) -> np.ndarray:
    """齐次点从物体坐标系变换到相机坐标系，保留 W 分量"""
    cMo = np.eye(4)
    cMo[:3, :3] = R
    cMo[:3, 3] = t
    return cMo @ np.asarray(oP, dtype=float)

def perspective_projection(cP: np.ndarray) -> np.ndarray:
    """透视投影到归一化平面 [X/Z, Y/Z, 1]，W 分量在比值中抵消"""
    X, Y, Z = cP[0], cP[1], cP[2]
    # Z 为 0 时得到 inf/nan，由特征构建时的深度检查报告
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.array([X / Z, Y / Z, 1.0])
