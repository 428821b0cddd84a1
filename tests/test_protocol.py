import pytest

from stardog.protocol import (
    BulletState,
    BulletStatus,
    GameSceneState,
    Input,
    PlayerState,
    PlayerStatus,
    ProtocolError,
    UserInputState,
)


def test_user_input_wire_bytes():
    message = UserInputState(id=1, input=Input.FIRE)
    assert message.to_bytes() == b"\x01\x00\x00\x00\x04\x00\x00\x00"


def test_user_input_none_is_all_ones():
    message = UserInputState(id=0, input=Input.NONE)
    assert message.to_bytes()[4:] == b"\xff\xff\xff\xff"


@pytest.mark.parametrize("command", list(Input))
def test_user_input_round_trip(command):
    message = UserInputState(id=5150, input=command)
    decoded = UserInputState.from_bytes(message.to_bytes())
    assert decoded == message


def test_user_input_ignores_trailing_bytes():
    data = UserInputState(id=7, input=Input.TURN_LEFT).to_bytes() + b"\x00" * 504
    decoded = UserInputState.from_bytes(data)
    assert decoded.id == 7
    assert decoded.input is Input.TURN_LEFT


def test_user_input_truncated():
    with pytest.raises(ProtocolError):
        UserInputState.from_bytes(b"\x01\x00\x00")


def test_user_input_invalid_command():
    data = (1).to_bytes(4, "little") + (99).to_bytes(4, "little")
    with pytest.raises(ProtocolError):
        UserInputState.from_bytes(data)


def test_player_state_size_and_float_layout():
    data = PlayerState(state=PlayerStatus.DEAD, pos_x=1.0).to_bytes()
    assert len(data) == PlayerState.SIZE == 24
    assert data[:4] == b"\x01\x00\x00\x00"
    assert data[4:8] == b"\x00\x00\x80\x3f"


def test_player_state_round_trip():
    player = PlayerState(
        state=PlayerStatus.DISCONNECT, pos_x=-2.5, pos_z=12.25, vel_x=0.5, vel_z=-10.0, rot=90.0
    )
    assert PlayerState.from_bytes(player.to_bytes()) == player


def test_player_state_invalid_status():
    data = bytearray(PlayerState().to_bytes())
    data[0] = 9
    with pytest.raises(ProtocolError):
        PlayerState.from_bytes(bytes(data))


def test_bullet_state_round_trip():
    bullet = BulletState(state=BulletStatus.SHOT, pos_x=3.0, pos_z=-4.0, vel_x=100.0, vel_z=0.0)
    data = bullet.to_bytes()
    assert len(data) == BulletState.SIZE == 20
    assert BulletState.from_bytes(data) == bullet


def test_bullet_state_truncated():
    with pytest.raises(ProtocolError):
        BulletState.from_bytes(BulletState().to_bytes()[:19])


def test_new_scene_has_four_loaded_bullets():
    scene = GameSceneState()
    assert scene.id == -1
    assert scene.players == []
    assert len(scene.bullets) == 4
    assert all(b.state is BulletStatus.LOADED for b in scene.bullets)


def test_new_scene_wire_header():
    data = GameSceneState().to_bytes()
    assert data[:12] == b"\xff\xff\xff\xff\x00\x00\x00\x00\x04\x00\x00\x00"
    assert len(data) == 12 + 4 * BulletState.SIZE


def test_scene_round_trip():
    scene = GameSceneState(
        id=2,
        players=[
            PlayerState(pos_x=1.0, rot=45.0),
            PlayerState(state=PlayerStatus.DEAD, pos_z=-8.0),
            PlayerState(vel_x=10.0, vel_z=-10.0),
        ],
        bullets=[
            BulletState(state=BulletStatus.SHOT, pos_x=5.0, vel_z=100.0),
            BulletState(),
        ],
    )
    data = scene.to_bytes()
    assert len(data) == 12 + 3 * PlayerState.SIZE + 2 * BulletState.SIZE
    assert GameSceneState.from_bytes(data) == scene


def test_scene_instances_do_not_share_bullets():
    first = GameSceneState()
    second = GameSceneState()
    first.bullets[0].state = BulletStatus.SHOT
    assert second.bullets[0].state is BulletStatus.LOADED


def test_scene_truncated_body():
    data = GameSceneState(players=[PlayerState()]).to_bytes()
    with pytest.raises(ProtocolError):
        GameSceneState.from_bytes(data[:-1])


def test_scene_truncated_header():
    with pytest.raises(ProtocolError):
        GameSceneState.from_bytes(b"\x00" * 11)


def test_scene_ignores_trailing_bytes():
    scene = GameSceneState(id=0, players=[PlayerState(pos_x=2.0)])
    decoded = GameSceneState.from_bytes(scene.to_bytes() + b"\x00" * 64)
    assert decoded == scene