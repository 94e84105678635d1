import enum
import logging
import math
import random
from dataclasses import dataclass

import pygame

logger = logging.getLogger(__name__)

# Screen configuration
SCREEN_LENGTH = 480
CELLS_PER_ROW = 48
TICK_MS = 100
START_SEGMENTS = 20

# Colors
CELL_COLOR = "#ff0000"
APPLE_COLOR = "#00ff00"
BACKGROUND = "#000000"


class InvalidArgumentError(ValueError):
    """Raised when a game object is built from a malformed argument."""


@dataclass(frozen=True)
class GameConfig:
    """Screen geometry and tick rate, fixed once the game has started."""

    screen_length: int = SCREEN_LENGTH
    cells_per_row: int = CELLS_PER_ROW
    tick_ms: int = TICK_MS

    def __post_init__(self):
        for name in ("screen_length", "cells_per_row", "tick_ms"):
            if getattr(self, name) <= 0:
                raise InvalidArgumentError(f"{name} has to be positive!")

    @property
    def edge_length(self):
        return self.screen_length / self.cells_per_row

    @property
    def ticks_per_second(self):
        return 1000 / self.tick_ms

    def snap(self, value):
        """Floor a pixel coordinate onto the grid."""
        return math.floor(value / self.edge_length) * self.edge_length

    def coordinate(self, index):
        """Pixel coordinate of a grid column or row."""
        return index * self.edge_length

    def index(self, value):
        """Nearest grid column or row of a pixel coordinate."""
        return round(value / self.edge_length)

    def shift(self, value, cells):
        """Move a grid-aligned coordinate by whole cells."""
        return self.coordinate(self.index(value) + cells)

    def random_coordinate(self, rng):
        """Return a random grid-aligned pixel coordinate inside the screen."""
        return self.coordinate(rng.randrange(self.cells_per_row))


DEFAULT_CONFIG = GameConfig()


@dataclass
class Vector2D:
    x: float
    y: float

    def set_pos(self, x, y):
        self.x = x
        self.y = y

    def copy(self):
        return Vector2D(self.x, self.y)

    def __str__(self):
        return f"{self.x}, {self.y}"


class Cell:
    """One grid square: a position, a color and the shared edge length."""

    def __init__(self, pos, color=CELL_COLOR, config=DEFAULT_CONFIG):
        self._config = config
        self.pos = pos
        self.color = color

    @property
    def pos(self):
        return self._pos

    @pos.setter
    def pos(self, val):
        if not isinstance(val, Vector2D):
            raise InvalidArgumentError("pos argument should be Vector2D!")
        # Cells never share a position object.
        self._pos = val.copy()

    @property
    def color(self):
        return self._color

    @color.setter
    def color(self, val):
        if not isinstance(val, str):
            raise InvalidArgumentError("Color has to be a string!")
        self._color = val

    @property
    def edge_length(self):
        return self._config.edge_length

    def draw(self, surface):
        """Paint the cell as a filled square."""
        edge = self.edge_length
        rect = pygame.Rect(int(self._pos.x), int(self._pos.y), math.ceil(edge), math.ceil(edge))
        pygame.draw.rect(surface, self._color, rect)

    def intersects(self, other):
        """Return True when both cells occupy the same grid square."""
        return self._pos.x == other.pos.x and self._pos.y == other.pos.y

    def __repr__(self):
        return f"Cell({self._pos}, {self._color!r})"


class Direction(enum.Enum):
    LEFT = "l"
    UP = "u"
    RIGHT = "r"
    DOWN = "d"

    @property
    def opposite(self):
        return _OPPOSITES[self]

    @property
    def unit(self):
        """Grid offset of one move in this direction."""
        return _UNIT_STEPS[self]

    def step(self, edge_length):
        """Pixel offset of one move in this direction."""
        dx, dy = self.unit
        return dx * edge_length, dy * edge_length


_OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}

_UNIT_STEPS = {
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}

KEY_TO_DIRECTION = {
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "s": Direction.DOWN,
    "w": Direction.UP,
}


class Snake:
    """Ordered body of cells, head at index 0 and tail at the end.

    The body is seeded with one head cell and then grown ``num_segments``
    times, so a snake built with ``num_segments=3`` has four cells.
    """

    MIN_SEGMENTS = 2

    def __init__(self, num_segments=MIN_SEGMENTS, config=DEFAULT_CONFIG, rng=None):
        self._config = config
        self._rng = rng if rng is not None else random
        self._num_segments = max(num_segments, self.MIN_SEGMENTS)
        self._body = []
        self._direction = Direction.UP
        self._init_body()

    def _init_body(self):
        self._body = [self._seed_cell()]
        for _ in range(self._num_segments):
            self.grow()

    def _seed_cell(self):
        # Head starts on a random column of the middle row.
        x = self._config.random_coordinate(self._rng)
        y = self._config.coordinate(self._config.cells_per_row // 2)
        return Cell(Vector2D(x, y), config=self._config)

    @property
    def body(self):
        return tuple(self._body)

    @property
    def head(self):
        return self._body[0]

    def __len__(self):
        return len(self._body)

    @property
    def direction(self):
        return self._direction

    @direction.setter
    def direction(self, val):
        try:
            requested = Direction(val)
        except ValueError:
            logger.debug("Ignoring unknown direction %r", val)
            return

        if requested is self._direction.opposite:
            logger.debug("Rejected reversal from %s to %s", self._direction.name, requested.name)
            return
        self._direction = requested

    def grow(self):
        """Append one cell below the tail, sliding sideways at the bottom edge."""
        if not self._body:
            self._body.append(self._seed_cell())
            return

        config = self._config
        last = self._body[-1].pos
        new_pos = Vector2D(last.x, config.shift(last.y, 1))

        if config.index(new_pos.y) >= config.cells_per_row:
            # Segment may end up detached from the chain.
            offset = 1 if last.x < config.screen_length / 2 else -1
            new_pos.set_pos(config.shift(last.x, offset), last.y)
            logger.debug("Tail growth clamped sideways to %s", new_pos)

        self._body.append(Cell(new_pos, config=self._config))

    def _get_new_pos(self):
        dx, dy = self._direction.unit
        head = self.head.pos
        return Vector2D(self._config.shift(head.x, dx), self._config.shift(head.y, dy))

    def move(self):
        """Advance one cell in the current direction, keeping the length."""
        new_head = Cell(self._get_new_pos(), config=self._config)
        # Each segment takes the position of the one ahead of it.
        trailing = [Cell(seg.pos, seg.color, self._config) for seg in self._body[:-1]]
        self._body = [new_head] + trailing

    def draw(self, surface):
        for seg in self._body:
            seg.draw(surface)


class Game:
    """Owns the snake and the apple and drives them one tick at a time."""

    def __init__(self, surface, config=DEFAULT_CONFIG, rng=None, num_segments=START_SEGMENTS):
        self._surface = surface
        self._config = config
        self._rng = rng if rng is not None else random
        self._snake = Snake(num_segments, config=config, rng=self._rng)
        self._apple = None
        self.new_apple()

    @property
    def snake(self):
        return self._snake

    @property
    def apple(self):
        return self._apple

    def new_apple(self):
        """Replace the apple with one at a random grid square."""
        pos = Vector2D(
            self._config.random_coordinate(self._rng),
            self._config.random_coordinate(self._rng),
        )
        self._apple = Cell(pos, APPLE_COLOR, self._config)
        logger.debug("Apple spawned at %s", pos)
        return self._apple

    def manage_collisions(self):
        """Eat the apple when the head sits on it; return True if eaten."""
        if not self._apple.intersects(self._snake.head):
            return False

        self.new_apple()
        self._snake.grow()
        logger.debug("Apple eaten, snake length is now %d", len(self._snake))
        return True

    def handle_key(self, key):
        direction = KEY_TO_DIRECTION.get(key)
        if direction is not None:
            self._snake.direction = direction

    def handle_event(self, event):
        """Process one pygame event; return False when the game should stop."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            self.handle_key(event.unicode)
        return True

    def clear(self):
        length = self._config.screen_length
        self._surface.fill(BACKGROUND, pygame.Rect(0, 0, length, length))

    def update(self):
        """Run one tick: collide, move, then redraw apple and snake."""
        self.clear()
        self.manage_collisions()
        self._snake.move()
        self._apple.draw(self._surface)
        self._snake.draw(self._surface)

    def run(self, clock=None):
        """Tick until the window is closed."""
        clock = clock or pygame.time.Clock()

        while True:
            # Input only changes the direction between ticks.
            for event in pygame.event.get():
                if not self.handle_event(event):
                    logger.info("Quit requested")
                    return

            self.update()
            pygame.display.flip()
            clock.tick(self._config.ticks_per_second)


def main():
    logging.basicConfig(level=logging.INFO)
    config = DEFAULT_CONFIG

    pygame.init()
    pygame.display.set_caption("Snake")
    screen = pygame.display.set_mode((config.screen_length, config.screen_length))
    logger.info(
        "Starting game: %d px screen, %d cells per row, %.1f px cells, %d ms tick",
        config.screen_length,
        config.cells_per_row,
        config.edge_length,
        config.tick_ms,
    )

    game = Game(screen, config)
    game.run()

    pygame.quit()


if __name__ == "__main__":
    main()
