"""
User audio state sent to and received from the spatial audio mixing server.

``AudioAPIData`` holds everything a client may send. ``ReceivedAudioAPIData``
wraps a snapshot together with the fields only the server assigns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields

from .orientation import EulerOrder, euler_to_quaternion
from .types import OrientationEuler3D, OrientationQuat3D, Point3D

logger = logging.getLogger(__name__)


def _changed(current: float | None, other: float | None) -> bool:
    """A leaf changed when the new value is present and not strictly equal.

    A leaf cleared in ``other`` is a removal, which is never transmitted.
    """
    return other is not None and other != current


def _leaf(value: object, name: str) -> float | None:
    # An absent sub-object compares as an empty one
    return None if value is None else getattr(value, name)


@dataclass(frozen=True)
class AudioAPIData:
    """
    Data that can be sent to AND received from the mixing server.

    Attributes:
        position: Where the user is. ``None`` when not supplied.
        orientation: Which way the user faces. ``None`` when not supplied.
        gain: How loud the user sounds to others and how far they carry.
            Unitless multiplier, ``None`` when not supplied.
    """

    position: Point3D | None = None
    orientation: OrientationQuat3D | None = None
    gain: float | None = None

    @classmethod
    def from_euler(
        cls,
        position: Point3D | None = None,
        orientation_euler: OrientationEuler3D | None = None,
        gain: float | None = None,
        order: EulerOrder | str = EulerOrder.YAW_PITCH_ROLL,
    ) -> AudioAPIData:
        """Build a snapshot from Euler angles instead of a quaternion."""
        orientation = None
        if orientation_euler is not None:
            orientation = euler_to_quaternion(orientation_euler, order)
        return cls(position=position, orientation=orientation, gain=gain)

    def diff(self, other: AudioAPIData) -> AudioAPIData:
        """
        Compute the minimal update that moves this snapshot to ``other``.

        Position and orientation are never emitted partially: a change to any
        coordinate sends the whole of ``other.position``, and a change to any
        quaternion component sends all four, taking unchanged components from
        this (current) snapshot. Gain is sent when it differs.

        Args:
            other: The newer snapshot.

        Returns:
            A new ``AudioAPIData`` with unchanged fields left as ``None``.
        """
        position = None
        if any(
            _changed(_leaf(self.position, name), _leaf(other.position, name))
            for name in ("x", "y", "z")
        ):
            # The mixer cannot take fragmented coordinates yet
            position = Point3D(
                x=other.position.x, y=other.position.y, z=other.position.z
            )

        orientation = None
        components: dict[str, float | None] = {}
        changed_any = False
        for name in ("w", "x", "y", "z"):
            current_value = _leaf(self.orientation, name)
            other_value = _leaf(other.orientation, name)
            if _changed(current_value, other_value):
                components[name] = other_value
                changed_any = True
            else:
                components[name] = current_value
        if changed_any:
            # Components absent on both sides take the identity defaults
            orientation = OrientationQuat3D(
                **{k: v for k, v in components.items() if v is not None}
            )

        gain = other.gain if _changed(self.gain, other.gain) else None

        result = AudioAPIData(position=position, orientation=orientation, gain=gain)
        present = [f.name for f in fields(result) if getattr(result, f.name) is not None]
        logger.debug(f"Diff carries {present or 'no changes'}")
        return result


@dataclass(frozen=True)
class ReceivedAudioAPIData:
    """
    Data that can only be received from the mixing server during peer updates.

    Attributes:
        data: The peer's position, orientation and gain.
        provided_user_id: Arbitrary user ID chosen by the application developer.
            Uniqueness is recommended but not enforced.
        hashed_visit_id: Hash of the random session UUID a client sends when
            connecting. Unique per client across mixers; never set by clients.
        volume_decibels: The peer's current volume. Never sent by clients.
    """

    data: AudioAPIData = field(default_factory=AudioAPIData)
    provided_user_id: str | None = None
    hashed_visit_id: str | None = None
    volume_decibels: float | None = None

    @classmethod
    def create(
        cls,
        position: Point3D | None = None,
        orientation: OrientationQuat3D | None = None,
        gain: float | None = None,
        provided_user_id: str | None = None,
        hashed_visit_id: str | None = None,
        volume_decibels: float | None = None,
    ) -> ReceivedAudioAPIData:
        """Build a received snapshot from flat base and server-only fields."""
        return cls(
            data=AudioAPIData(position=position, orientation=orientation, gain=gain),
            provided_user_id=provided_user_id,
            hashed_visit_id=hashed_visit_id,
            volume_decibels=volume_decibels,
        )

    @property
    def position(self) -> Point3D | None:
        return self.data.position

    @property
    def orientation(self) -> OrientationQuat3D | None:
        return self.data.orientation

    @property
    def gain(self) -> float | None:
        return self.data.gain
