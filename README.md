# zeetris

A compact falling-block puzzle game. Pieces come from a shuffled seven-piece
bag, one piece can be held per spawn, a hard drop sends the piece straight to
where it would land, and a piece locks after resting on the stack for a short
delay. Full rows are cleared automatically.

## Installing

```
pip install .
```

The game window is drawn with pygame, which is installed as a dependency.

## Playing

The game needs a font file for its status text. By default it looks for
`assets/unifont-16.0.02.otf` relative to the current directory; point it at
any other font file with `--font`:

```
zeetris --font path/to/font.otf
```

If the font file is missing or cannot be loaded, the command stops with
`RuntimeError: Failed to load unifont`.

Controls:

| Key         | Action                      |
|-------------|-----------------------------|
| Left        | move the piece left         |
| Right       | move the piece right        |
| Z           | rotate counter-clockwise    |
| X           | rotate clockwise            |
| Space       | hard drop                   |
| Left Shift  | swap with the held piece    |

Close the window to quit. The top-left corner of the window shows the frame
rate, the rendered and logical frame counts, and the current piece's rotation
state (0 to 3). A small square marks the rotation centre of the current piece.

The game logic runs at 60 logical frames per second. A piece falls one row
every 60 logical frames and locks 90 frames after it touches down.

## What the game does not do

The window shows only the field, the falling piece, its rotation-centre marker
and the status text. The landing shadow is computed (and used by the hard
drop) but not drawn, and neither the held piece nor the preview queue is shown
on screen. There is no soft drop key, no wall kicks, no score or level, and no
game-over check: a new piece is spawned whether or not its cells are free.

## Using the game state directly

The rules live in `zeetris.board.GameData` and can be driven without a window:

```python
import random

from zeetris.board import GameData
from zeetris.pieces import RotationState

game = GameData()
rng = random.Random(0)
game.new_bag(rng, 2)
game.new_block()

game.move((0, -1))                # one column to the left
game.rotate(RotationState.RIGHT)  # clockwise
game.exchange_hold()              # swap with the hold slot
game.hard_drop()                  # lock at the shadow position and spawn the next piece
game.clear_lines()                # returns the number of rows removed
```

`move` and `rotate` return `False` and leave the piece unchanged when the new
position is blocked; `rotate` raises `ValueError` for anything other than
`RotationState.LEFT` or `RotationState.RIGHT`.

`GameData.logic_frame(frame_count, rng)` advances one logical frame: landing
and lock delay, gravity, line clearing and adding a new bag when only seven
pieces are left in the preview queue. `GameData.new_block()` raises
`zeetris.board.EmptyQueueError` when the preview queue is empty.

The board is 10 columns wide and 22 rows high, with row 0 at the bottom;
`GameData.matrix[y][x]` holds a `BlockType`. Piece shapes come from
`zeetris.pieces.spawn_shape(block_type)`.

## Running the tests

```
pip install .[test]
pytest
```