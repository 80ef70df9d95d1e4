"""Screen transform used to display the map: a uniform scale plus an offset."""

from dataclasses import dataclass

_MIN_SD = 1e-3


@dataclass
class MapView:
    """Maps world coordinates to screen coordinates.

    A world point ``(x, y)`` is drawn at ``(scale * x + x0, scale * y + y0)``,
    measured from the centre of the screen.
    """

    scale: float = 4.0
    x0: float = 280.0
    y0: float = 280.0

    def world_to_screen(self, x: float, y: float) -> tuple[float, float]:
        """Return the screen position of world point ``(x, y)``."""
        return self.scale * x + self.x0, self.scale * y + self.y0

    def screen_to_world(
        self, screen_w: float, screen_h: float, x: float, y: float
    ) -> tuple[float, float]:
        """Return the world point under pixel ``(x, y)`` of a screen of the given size."""
        return (
            (x - 0.5 * screen_w - self.x0) / self.scale,
            (y - 0.5 * screen_h - self.y0) / self.scale,
        )

    def centre(self) -> None:
        """Put the world origin at the centre of the screen."""
        self.x0 = 0.0
        self.y0 = 0.0

    def zoom_to_fit(
        self, n: float, x_sd: float, y_sd: float, screen_w: float, screen_h: float
    ) -> None:
        """Scale so that ``n`` standard deviations either side fit on the screen.

        Nothing changes when either standard deviation is tiny.
        """
        if x_sd < _MIN_SD or y_sd < _MIN_SD:
            return
        self.scale = min(screen_w / (2 * n * x_sd), screen_h / (2 * n * y_sd))

    def scroll(self, dx: float, dy: float) -> None:
        """Shift the view by ``(dx, dy)`` screen units."""
        self.x0 += dx
        self.y0 += dy

    def zoom(self, screen_x: float, screen_y: float, amt: float) -> None:
        """Scale by ``amt`` keeping screen point ``(screen_x, screen_y)`` fixed."""
        self.scale *= amt
        self.x0 = self.x0 * amt + screen_x * (1.0 - amt)
        self.y0 = self.y0 * amt + screen_y * (1.0 - amt)