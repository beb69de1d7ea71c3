"""
Transforms
==========

Rotation and model-matrix helpers for placing bodies in the scene.

World frame is Y-up. Rotations are right-handed (counter-clockwise when
looking down the axis) and matrices act on column vectors.
"""

import numpy as np

X_AXIS = np.array([1.0, 0.0, 0.0])
UP = np.array([0.0, 1.0, 0.0])
Z_AXIS = np.array([0.0, 0.0, 1.0])


def rotation_matrix(degrees: float, axis: np.ndarray) -> np.ndarray:
    """
    Rotation about an arbitrary axis (Rodrigues' formula).

    Args:
        degrees: Rotation angle in degrees
        axis: Rotation axis (need not be normalized)

    Returns:
        3x3 rotation matrix
    """
    axis = np.asarray(axis, dtype=float)
    x, y, z = axis / np.linalg.norm(axis)
    theta = np.radians(degrees)
    c = np.cos(theta)
    s = np.sin(theta)
    t = 1.0 - c

    return np.array([
        [c + x*x*t, x*y*t - z*s, x*z*t + y*s],
        [y*x*t + z*s, c + y*y*t, y*z*t - x*s],
        [z*x*t - y*s, z*y*t + x*s, c + z*z*t]
    ])


def homogeneous(rotation: np.ndarray) -> np.ndarray:
    """Embed a 3x3 matrix in a 4x4 transform."""
    m = np.eye(4)
    m[:3, :3] = rotation
    return m


def translation_matrix(offset: np.ndarray) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = offset
    return m


def scale_matrix(scale) -> np.ndarray:
    m = np.eye(4)
    m[:3, :3] = np.diag(np.broadcast_to(np.asarray(scale, dtype=float), (3,)))
    return m


def model_matrix(position: np.ndarray,
                 orientation: np.ndarray = None,
                 scale=1.0) -> np.ndarray:
    """
    Compose translate * rotate * scale.

    Args:
        position: World position
        orientation: 3x3 orientation (identity if None)
        scale: Uniform scale or per-axis scale vector

    Returns:
        4x4 model matrix
    """
    m = translation_matrix(position)
    if orientation is not None:
        m = m @ homogeneous(orientation)
    return m @ scale_matrix(scale)


def normal_matrix(model: np.ndarray) -> np.ndarray:
    """Inverse-transpose of the upper 3x3, for transforming surface normals."""
    return np.linalg.inv(model[:3, :3]).T


def transform_point(model: np.ndarray, point: np.ndarray) -> np.ndarray:
    p = np.append(np.asarray(point, dtype=float), 1.0)
    return (model @ p)[:3]
