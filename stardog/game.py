"""Server-side game simulation: ships, bullets and hits."""

from __future__ import annotations

import dataclasses
import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from stardog.protocol import (
    BULLET_SPEED,
    SHIP_SPEED,
    BulletStatus,
    GameSceneState,
    Input,
    PlayerState,
    PlayerStatus,
    UserInputState,
)

logger = logging.getLogger(__name__)

BULLET_LIFETIME = 2.0
BROAD_PHASE_RADIUS = 15.0
EDGE_DISTANCE = 4.0
MUZZLE_OFFSET = 5.0

_SHIP_FRONT = (0.0, 4.6)
_SHIP_BACK_LEFT = (-2.0, -4.0)
_SHIP_BACK_RIGHT = (2.0, -4.0)

Point = tuple[float, float]


def _rotate(x: float, z: float, rot: float) -> Point:
    theta = math.radians(rot)
    cos, sin = math.cos(theta), math.sin(theta)
    return (x * cos + z * sin, -x * sin + z * cos)


def rotation_direction(rot: float) -> Point:
    """Return the (x, z) unit vector a ship faces at heading ``rot`` degrees."""
    return _rotate(0.0, 1.0, rot)


def closest_point_on_segment(point: Point, a: Point, b: Point) -> Point:
    """Return the point of segment ``a``-``b`` nearest to ``point``."""
    dx, dz = b[0] - a[0], b[1] - a[1]
    length = math.hypot(dx, dz)
    if length == 0.0:
        return a
    dx, dz = dx / length, dz / length
    t = (point[0] - a[0]) * dx + (point[1] - a[1]) * dz
    if t <= 0.0:
        return a
    if t >= length:
        return b
    return (a[0] + dx * t, a[1] + dz * t)


def bullet_ship_collision(
    ship_x: float, ship_z: float, ship_rot: float, bullet_x: float, bullet_z: float
) -> bool:
    """Return whether a bullet is close enough to all three edges of a ship."""
    bullet = (bullet_x, bullet_z)
    if math.dist((ship_x, ship_z), bullet) > BROAD_PHASE_RADIUS:
        return False

    def corner(local: Point) -> Point:
        x, z = _rotate(local[0], local[1], ship_rot)
        return (x + ship_x, z + ship_z)

    front = corner(_SHIP_FRONT)
    back_left = corner(_SHIP_BACK_LEFT)
    back_right = corner(_SHIP_BACK_RIGHT)

    edges = ((front, back_left), (front, back_right), (back_right, back_left))
    return all(
        math.dist(closest_point_on_segment(bullet, a, b), bullet) <= EDGE_DISTANCE
        for a, b in edges
    )


@dataclass
class Player:
    """A connected client and the ship it controls."""

    address: tuple
    state: PlayerState
    input: UserInputState = field(default_factory=UserInputState)
    time_since_shot: float = 0.0

    @property
    def port(self) -> int:
        return self.address[1]


class GameWorld:
    """All players and bullets of one game, advanced in fixed steps."""

    def __init__(self, bullet_lifetime: float = BULLET_LIFETIME) -> None:
        self.scene = GameSceneState()
        self.players: list[Player] = []
        self.bullet_lifetime = bullet_lifetime

    @property
    def max_players(self) -> int:
        return len(self.scene.bullets)

    def player_for(self, address: tuple) -> Player:
        """Return the player sending from ``address``'s port, joining it if new."""
        port = address[1]
        for player in self.players:
            if player.port == port:
                return player
        if len(self.players) >= self.max_players:
            raise RuntimeError(f"game is full ({self.max_players} players)")

        state = PlayerState(state=PlayerStatus.ALIVE)
        self.scene.players.append(state)
        player = Player(address=address, state=state, input=UserInputState(id=port))
        self.players.append(player)
        return player

    def receive_input(self, address: tuple, data: bytes) -> Player:
        """Record the command in ``data`` as the sender's current input."""
        command = UserInputState.from_bytes(data)
        player = self.player_for(address)
        player.input = command
        return player

    def update_players(self, elapsed: float) -> None:
        for index, player in enumerate(self.players):
            ship = player.state
            command = player.input.input
            if ship.state == PlayerStatus.ALIVE:
                if command in (Input.FORWARD, Input.BACKWARD):
                    sign = 1.0 if command == Input.FORWARD else -1.0
                    dir_x, dir_z = rotation_direction(ship.rot)
                    ship.vel_x = dir_x * SHIP_SPEED * sign
                    ship.vel_z = dir_z * SHIP_SPEED * sign
                    ship.pos_x += dir_x * SHIP_SPEED * elapsed * sign
                    ship.pos_z += dir_z * SHIP_SPEED * elapsed * sign
                    logger.debug("port %d moved to (%f, %f)", player.port, ship.pos_x, ship.pos_z)
                else:
                    ship.vel_x = 0.0
                    ship.vel_z = 0.0

                if command == Input.TURN_LEFT:
                    ship.rot += SHIP_SPEED * 2 * elapsed
                elif command == Input.TURN_RIGHT:
                    ship.rot -= SHIP_SPEED * 2 * elapsed
                elif command == Input.FIRE:
                    bullet = self.scene.bullets[index]
                    if bullet.state == BulletStatus.LOADED:
                        logger.debug("port %d fired", player.port)
                        dir_x, dir_z = rotation_direction(ship.rot)
                        bullet.state = BulletStatus.SHOT
                        bullet.pos_x = ship.pos_x + dir_x * MUZZLE_OFFSET
                        bullet.pos_z = ship.pos_z + dir_z * MUZZLE_OFFSET
                        bullet.vel_x = dir_x * BULLET_SPEED
                        bullet.vel_z = dir_z * BULLET_SPEED
                        player.time_since_shot = 0.0
                        player.input.input = Input.NONE
            elif ship.state == PlayerStatus.DEAD and command == Input.FIRE:
                ship.state = PlayerStatus.ALIVE
                player.input.input = Input.NONE

    def update_bullets(self, elapsed: float) -> None:
        for player, bullet in zip(self.players, self.scene.bullets):
            if player.time_since_shot >= self.bullet_lifetime:
                bullet.state = BulletStatus.LOADED
                player.time_since_shot = 0.0
            if bullet.state == BulletStatus.SHOT:
                bullet.pos_x += bullet.vel_x * elapsed
                bullet.pos_z += bullet.vel_z * elapsed
            player.time_since_shot += elapsed

    def check_collisions(self) -> None:
        for bullet in self.scene.bullets:
            if bullet.state == BulletStatus.LOADED:
                continue
            for index, ship in enumerate(self.scene.players):
                if not bullet_ship_collision(
                    ship.pos_x, ship.pos_z, ship.rot, bullet.pos_x, bullet.pos_z
                ):
                    continue
                if ship.state == PlayerStatus.ALIVE:
                    logger.debug("port %d was hit", self.players[index].port)
                    ship.state = PlayerStatus.DEAD
                    bullet.state = BulletStatus.LOADED

    def step(self, elapsed: float) -> None:
        """Advance the game by ``elapsed`` seconds."""
        self.update_players(elapsed)
        self.update_bullets(elapsed)
        self.check_collisions()

    def snapshots(self) -> Iterator[tuple[tuple, bytes]]:
        """Yield each player's address with the scene encoded for that player."""
        for index, player in enumerate(self.players):
            yield player.address, dataclasses.replace(self.scene, id=index).to_bytes()