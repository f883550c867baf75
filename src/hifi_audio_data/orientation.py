"""
Conversions between Euler angle and quaternion orientations.

The formulas match GLM's ``quat(eulerAngles)`` and ``eulerAngles(quat)``.
No normalisation or clamping is applied: degenerate input (NaN, infinities,
quaternions drifting off unit norm) yields NaN components instead of raising.
"""

import logging
import math
from collections.abc import Callable
from enum import Enum

from .types import OrientationEuler3D, OrientationQuat3D

logger = logging.getLogger(__name__)

HALF_DEG_TO_RAD = 0.5 * math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi


class EulerOrder(str, Enum):
    """Composition order of the three single-axis rotations."""

    YAW_PITCH_ROLL = "yaw_pitch_roll"
    ROLL_YAW_PITCH = "roll_yaw_pitch"


def _ieee(func: Callable[[float], float], value: float) -> float:
    # math raises on out-of-domain input where IEEE-754 returns NaN
    try:
        return func(value)
    except ValueError:
        logger.debug(f"{func.__name__}({value}) is out of domain, returning NaN")
        return math.nan


def _half_angle_terms(
    euler: OrientationEuler3D,
) -> tuple[float, float, float, float, float, float]:
    p = euler.pitch_degrees * HALF_DEG_TO_RAD
    y = euler.yaw_degrees * HALF_DEG_TO_RAD
    r = euler.roll_degrees * HALF_DEG_TO_RAD
    return (
        _ieee(math.cos, p),
        _ieee(math.cos, y),
        _ieee(math.cos, r),
        _ieee(math.sin, p),
        _ieee(math.sin, y),
        _ieee(math.sin, r),
    )


def _quaternion_from_terms(euler: OrientationEuler3D) -> OrientationQuat3D:
    cos_p, cos_y, cos_r, sin_p, sin_y, sin_r = _half_angle_terms(euler)
    return OrientationQuat3D(
        w=cos_p * cos_y * cos_r + sin_p * sin_y * sin_r,
        x=sin_p * cos_y * cos_r - cos_p * sin_y * sin_r,
        y=cos_p * sin_y * cos_r + sin_p * cos_y * sin_r,
        z=cos_p * cos_y * sin_r - sin_p * sin_y * cos_r,
    )


def _euler_from_quaternion(quat: OrientationQuat3D) -> OrientationEuler3D:
    qw2 = quat.w * quat.w
    qx2 = quat.x * quat.x
    qy2 = quat.y * quat.y
    qz2 = quat.z * quat.z
    qwx = quat.w * quat.x
    qwy = quat.w * quat.y
    qwz = quat.w * quat.z
    qxy = quat.x * quat.y
    qyz = quat.y * quat.z
    qzx = quat.z * quat.x

    # Rotation matrix of a unit quaternion:
    #   { 1 - 2qy2 - 2qz2 | 2(qxy - qwz)    | 2(qzx + qwy)    }
    #   { 2(qxy + qwz)    | 1 - 2qx2 - 2qz2 | 2(qyz - qwx)    }
    #   { 2(qzx - qwy)    | 2(qyz + qwx)    | 1 - 2qx2 - 2qy2 }
    return OrientationEuler3D(
        yaw_degrees=RAD_TO_DEG * _ieee(math.asin, -2.0 * (qzx - qwy)),
        pitch_degrees=RAD_TO_DEG * math.atan2(2.0 * (qyz + qwx), qw2 - qx2 - qy2 + qz2),
        roll_degrees=RAD_TO_DEG * math.atan2(2.0 * (qxy + qwz), qw2 + qx2 - qy2 - qz2),
    )


def yaw_pitch_roll_to_quaternion(euler: OrientationEuler3D) -> OrientationQuat3D:
    """
    Compute the orientation quaternion from Euler angles applied in the order
    yaw (vertical axis), pitch (right axis), roll (front axis).

    The resulting rotation is ``V_world = [Yaw][Pitch][Roll] V_local``.

    Args:
        euler: Yaw, pitch and roll in degrees.

    Returns:
        The combined rotation as a quaternion (not re-normalised).
    """
    return _quaternion_from_terms(euler)


def yaw_pitch_roll_from_quaternion(quat: OrientationQuat3D) -> OrientationEuler3D:
    """Recover yaw, pitch and roll (degrees) from a unit quaternion.

    Near yaw = +/-90 degrees pitch and roll are not independently recoverable.
    """
    return _euler_from_quaternion(quat)


def roll_yaw_pitch_to_quaternion(euler: OrientationEuler3D) -> OrientationQuat3D:
    """
    Compute the orientation quaternion from Euler angles applied in the order
    roll (back axis), yaw (vertical axis), pitch (right axis).

    The resulting rotation is ``V_world = [Roll][Yaw][Pitch] V_local``. With this
    axis convention it shares the closed form of the yaw-pitch-roll variant.
    """
    return _quaternion_from_terms(euler)


def roll_yaw_pitch_from_quaternion(quat: OrientationQuat3D) -> OrientationEuler3D:
    """Inverse of ``roll_yaw_pitch_to_quaternion``."""
    return _euler_from_quaternion(quat)


_TO_QUATERNION: dict[EulerOrder, Callable[[OrientationEuler3D], OrientationQuat3D]] = {
    EulerOrder.YAW_PITCH_ROLL: yaw_pitch_roll_to_quaternion,
    EulerOrder.ROLL_YAW_PITCH: roll_yaw_pitch_to_quaternion,
}

_FROM_QUATERNION: dict[EulerOrder, Callable[[OrientationQuat3D], OrientationEuler3D]] = {
    EulerOrder.YAW_PITCH_ROLL: yaw_pitch_roll_from_quaternion,
    EulerOrder.ROLL_YAW_PITCH: roll_yaw_pitch_from_quaternion,
}


def euler_to_quaternion(
    euler: OrientationEuler3D,
    order: EulerOrder | str = EulerOrder.YAW_PITCH_ROLL,
) -> OrientationQuat3D:
    """Convert Euler angles to a quaternion using the given composition order."""
    return _TO_QUATERNION[EulerOrder(order)](euler)


def quaternion_to_euler(
    quat: OrientationQuat3D,
    order: EulerOrder | str = EulerOrder.YAW_PITCH_ROLL,
) -> OrientationEuler3D:
    """Convert a quaternion to Euler angles using the given composition order."""
    return _FROM_QUATERNION[EulerOrder(order)](quat)
