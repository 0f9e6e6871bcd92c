import numpy as np
from scipy.spatial.transform import Rotation


def rotation_mat_x(angle_rad: float) -> np.ndarray:
    """Rotation matrix to rotate a vector around the X-axis by a given angle (in radians)."""
    rotation_matrix = np.array([
        [1, 0, 0],
        [0, np.cos(angle_rad), -np.sin(angle_rad)],
        [0, np.sin(angle_rad), np.cos(angle_rad)]
    ])
    return rotation_matrix


def rotate_vector(vector: np.ndarray, axis: np.ndarray, angle_rad: float) -> np.ndarray:
    """Rotate a vector around an arbitrary axis using quaternions."""
    axis = axis / np.linalg.norm(axis)  # Normalize the axis of rotation
    rotation = Rotation.from_rotvec(angle_rad * axis)
    return rotation.apply(vector)

deg2rad = lambda ang_deg: np.pi * ang_deg / 180.0

normalize = lambda vec: vec / np.linalg.norm(vec, axis=-1)[..., None]


def tilted_axis(axial_tilt_deg: float, azimuth_deg: float = 0.0) -> np.ndarray:
    """
    Unit vector of a spin axis tilted away from +Z.
    :param axial_tilt_deg: Tilt in degrees; 0 points along +Z, 180 along -Z (retrograde).
    :param azimuth_deg: Direction of the tilt, measured around +Z.
    :return: numpy array of shape (3,)
    """
    z_axis = np.array([0, 0, 1], dtype=np.float64)
    axis = np.dot(rotation_mat_x(deg2rad(axial_tilt_deg)), z_axis)
    if azimuth_deg != 0.0:
        axis = rotate_vector(axis, z_axis, deg2rad(azimuth_deg))
    return normalize(axis)  # Just to be sure
