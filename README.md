# stardog

The server side of a small multiplayer space shooter, together with the wire
format and the bitmap tools it shares with the game client:

- `stardog.protocol` holds the little-endian wire format for player input
  (`UserInputState`) and for the world snapshot the server sends back
  (`GameSceneState`, which carries `PlayerState` and `BulletState` records).
- `stardog.game` holds the simulation. `GameWorld` moves the ships, fires and
  reloads bullets, and checks bullet/ship hits with `bullet_ship_collision`.
- `stardog.server` holds `GameServer`, which binds a non-blocking UDP socket,
  takes in client input, steps the world and broadcasts snapshots.
- `stardog.pixel`, `stardog.bitmap_header`, `stardog.bmp_reader`,
  `stardog.bmp_writer` and `stardog.image` read and write uncompressed 24-bit
  BMP files.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
stardog-server
```

By default the server listens on UDP port 5150 on every interface; `--host`
and `--port` change that. It prints its address on start and stops on
Ctrl+C.

While running, the server reads at most one datagram per pass. A player is
known by the source port it sends from; the first datagram from a new port
joins that player, up to four players. The world is stepped when at least
1/60 s has passed since the last step, with the whole elapsed time, and the
scene is sent to every player five times a second, each copy carrying that
player's own ship index as `id`. Datagrams that do not decode, and players
beyond the fourth, are logged as warnings and ignored.

Moves, shots and hits are logged at debug level through the `logging`
module; the command does not configure logging, so they are only shown when
the embedding program turns debug logging on.

```python
from stardog.server import GameServer

with GameServer(port=5150) as server:
    while True:
        server.update()
```

## Game rules

- `Input.FORWARD` and `Input.BACKWARD` move a live ship along its heading at
  `SHIP_SPEED`; any other input stops it.
- `Input.TURN_LEFT` and `Input.TURN_RIGHT` turn it at twice `SHIP_SPEED`
  degrees per second.
- `Input.FIRE` shoots the player's bullet if it is loaded; the bullet flies at
  `BULLET_SPEED` and reloads after two seconds or on a hit.
- A ship hit by a bullet becomes `PlayerStatus.DEAD`; a dead player's
  `Input.FIRE` brings it back to life.

## Wire format

Every integer and float is four bytes, little-endian.

| Message          | Layout                                                         |
|------------------|----------------------------------------------------------------|
| user input       | `id`, `input` (8 bytes)                                        |
| player state     | `state`, `pos_x`, `pos_z`, `vel_x`, `vel_z`, `rot` (24 bytes)  |
| bullet state     | `state`, `pos_x`, `pos_z`, `vel_x`, `vel_z` (20 bytes)         |
| game scene state | `id`, player count, bullet count, players, then bullets        |

```python
from stardog.protocol import GameSceneState, Input, UserInputState

packet = UserInputState(id=0, input=Input.FIRE).to_bytes()
assert UserInputState.from_bytes(packet).input is Input.FIRE

scene = GameSceneState.from_bytes(GameSceneState().to_bytes())
print(len(scene.bullets))  # four loaded bullets, one for each player slot
```

Bytes that are too short or carry an unknown enum value raise
`ProtocolError`.

## Bitmaps

```python
from stardog.image import BmpImage

image = BmpImage.load("texture.bmp")
print(image.pixel_at(0, 0))
print(image.pixel_at_uv(0.5, 0.5))
image.save("copy.bmp")
```

`pixel_at` clamps positions past the last row or column. The lower-level
`decode_bitmap`/`read_bitmap` and `encode_bitmap`/`write_bitmap` work with a
`BitmapHeader` and a flat list of `Pixel`s; `BitmapHeader.for_size` builds the
header for a new image.

Only 24-bit bitmaps are read. Data whose first two bytes are neither `B` nor
`M` raises `NotABitmapError`, another bit depth raises
`UnsupportedBitDepthError`, and data that ends too early raises
`TruncatedBitmapError`. All three are `BitmapError`s.

## What this package does not do

There is no game client here: nothing draws the game, reads the keyboard or
sends input to the server. Bitmaps are only read and written; they are not
uploaded or shown anywhere. The server never drops a player who goes quiet,
and it does not save anything between runs.