"""Wire format shared by the game server and its clients.

Every value is a little-endian 32-bit field: integers are signed, floats
are IEEE-754 single precision. Positions and velocities only carry the X
and Z components because ships never leave the Y = 0 plane; rotation is
around the Y axis, in degrees.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum

SHIP_SPEED = 10.0
BULLET_SPEED = 100.0

BULLETS_PER_GAME = 4

_INPUT_FORMAT = struct.Struct("<ii")
_PLAYER_FORMAT = struct.Struct("<i5f")
_BULLET_FORMAT = struct.Struct("<i4f")
_SCENE_HEADER_FORMAT = struct.Struct("<iII")


class ProtocolError(ValueError):
    """Raised when a message cannot be decoded."""


class Input(IntEnum):
    """A single command sent by a client."""

    NONE = -1
    FORWARD = 0
    BACKWARD = 1
    TURN_LEFT = 2
    TURN_RIGHT = 3
    FIRE = 4


class PlayerStatus(IntEnum):
    ALIVE = 0
    DEAD = 1
    DISCONNECT = 2


class BulletStatus(IntEnum):
    LOADED = 0
    SHOT = 1


def _unpack(fmt: struct.Struct, data: bytes, offset: int = 0) -> tuple:
    if len(data) - offset < fmt.size:
        raise ProtocolError(
            f"need {fmt.size} bytes at offset {offset}, "
            f"got {max(len(data) - offset, 0)}"
        )
    return fmt.unpack_from(data, offset)


def _enum_value(enum_type, raw: int):
    try:
        return enum_type(raw)
    except ValueError:
        raise ProtocolError(f"invalid {enum_type.__name__} value {raw}") from None


@dataclass
class UserInputState:
    """A client's current command, tagged with the client id."""

    id: int = 0
    input: Input = Input.NONE

    SIZE = _INPUT_FORMAT.size

    def to_bytes(self) -> bytes:
        return _INPUT_FORMAT.pack(self.id, int(self.input))

    @classmethod
    def from_bytes(cls, data: bytes) -> UserInputState:
        """Decode from the start of ``data``; trailing bytes are ignored."""
        ident, raw_input = _unpack(_INPUT_FORMAT, bytes(data))
        return cls(id=ident, input=_enum_value(Input, raw_input))


@dataclass
class PlayerState:
    """Position, velocity and heading of one ship."""

    state: PlayerStatus = PlayerStatus.ALIVE
    pos_x: float = 0.0
    pos_z: float = 0.0
    vel_x: float = 0.0
    vel_z: float = 0.0
    rot: float = 0.0

    SIZE = _PLAYER_FORMAT.size

    def to_bytes(self) -> bytes:
        return _PLAYER_FORMAT.pack(
            int(self.state), self.pos_x, self.pos_z, self.vel_x, self.vel_z, self.rot
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> PlayerState:
        """Decode from the start of ``data``; trailing bytes are ignored."""
        raw_state, pos_x, pos_z, vel_x, vel_z, rot = _unpack(_PLAYER_FORMAT, bytes(data))
        return cls(
            state=_enum_value(PlayerStatus, raw_state),
            pos_x=pos_x,
            pos_z=pos_z,
            vel_x=vel_x,
            vel_z=vel_z,
            rot=rot,
        )


@dataclass
class BulletState:
    """Position and velocity of one bullet."""

    state: BulletStatus = BulletStatus.LOADED
    pos_x: float = 0.0
    pos_z: float = 0.0
    vel_x: float = 0.0
    vel_z: float = 0.0

    SIZE = _BULLET_FORMAT.size

    def to_bytes(self) -> bytes:
        return _BULLET_FORMAT.pack(
            int(self.state), self.pos_x, self.pos_z, self.vel_x, self.vel_z
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> BulletState:
        """Decode from the start of ``data``; trailing bytes are ignored."""
        raw_state, pos_x, pos_z, vel_x, vel_z = _unpack(_BULLET_FORMAT, bytes(data))
        return cls(
            state=_enum_value(BulletStatus, raw_state),
            pos_x=pos_x,
            pos_z=pos_z,
            vel_x=vel_x,
            vel_z=vel_z,
        )


def _default_bullets() -> list[BulletState]:
    return [BulletState() for _ in range(BULLETS_PER_GAME)]


@dataclass
class GameSceneState:
    """The whole game as broadcast to each client.

    ``id`` is the index of the receiving client's ship, or -1 if unknown.
    A fresh scene has no players and one loaded bullet per possible player.
    """

    id: int = -1
    players: list[PlayerState] = field(default_factory=list)
    bullets: list[BulletState] = field(default_factory=_default_bullets)

    HEADER_SIZE = _SCENE_HEADER_FORMAT.size

    def to_bytes(self) -> bytes:
        parts = [_SCENE_HEADER_FORMAT.pack(self.id, len(self.players), len(self.bullets))]
        parts.extend(player.to_bytes() for player in self.players)
        parts.extend(bullet.to_bytes() for bullet in self.bullets)
        return b"".join(parts)

    @classmethod
    def from_bytes(cls, data: bytes) -> GameSceneState:
        """Decode from the start of ``data``; trailing bytes are ignored."""
        data = bytes(data)
        ident, player_count, bullet_count = _unpack(_SCENE_HEADER_FORMAT, data)
        offset = _SCENE_HEADER_FORMAT.size
        needed = offset + player_count * PlayerState.SIZE + bullet_count * BulletState.SIZE
        if len(data) < needed:
            raise ProtocolError(f"scene needs {needed} bytes, got {len(data)}")

        players = []
        for _ in range(player_count):
            players.append(PlayerState.from_bytes(data[offset:offset + PlayerState.SIZE]))
            offset += PlayerState.SIZE

        bullets = []
        for _ in range(bullet_count):
            bullets.append(BulletState.from_bytes(data[offset:offset + BulletState.SIZE]))
            offset += BulletState.SIZE

        return cls(id=ident, players=players, bullets=bullets)