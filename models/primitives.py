"""
Shared primitive data types.

Geometric and colour types used by the modes, the palette and the input
layer.
"""

from pydantic import BaseModel, field_validator, computed_field, ConfigDict
from typing import Tuple


class Point2D(BaseModel):
    """Immutable 2D point for pointer positions and layout anchors.

    Attributes:
        x: X coordinate (horizontal, grows to the right)
        y: Y coordinate (vertical, grows downwards)

    Examples:
        >>> pos = Point2D(x=100.0, y=200.0)
        >>> pos.distance_to(Point2D(x=103.0, y=204.0))
        5.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    def __str__(self) -> str:
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


# Velocities and offsets use the same type
Vector2D = Point2D


class Color(BaseModel):
    """Immutable RGBA color with validation.

    All color components must be in the range [0, 255] inclusive.

    Examples:
        >>> Color.from_hex('#C75B5B').as_rgb_tuple
        (199, 91, 91)
    """
    r: int
    g: int
    b: int
    a: int = 255

    @field_validator('r', 'g', 'b', 'a')
    @classmethod
    def validate_color_range(cls, v: int) -> int:
        """Validate color components are in valid range [0, 255]."""
        if not 0 <= v <= 255:
            raise ValueError(f'Color component must be in range [0, 255], got {v}')
        return v

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Build a colour from '#RRGGBB' notation."""
        value = value.lstrip('#')
        if len(value) != 6:
            raise ValueError(f'Expected #RRGGBB colour, got {value!r}')
        return cls(r=int(value[0:2], 16), g=int(value[2:4], 16), b=int(value[4:6], 16))

    @computed_field
    @property
    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return color as RGBA tuple for pygame compatibility."""
        return (self.r, self.g, self.b, self.a)

    @computed_field
    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        """Return color as RGB tuple (without alpha)."""
        return (self.r, self.g, self.b)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Color(r={self.r}, g={self.g}, b={self.b}, a={self.a})"


class Rectangle(BaseModel):
    """Immutable rectangle defined by position and dimensions.

    Used for UI hit regions (buttons, the creation pool).
    Position is at top-left corner (pygame convention).

    Examples:
        >>> rect = Rectangle(x=100.0, y=100.0, width=50.0, height=50.0)
        >>> rect.contains_point(Point2D(x=125.0, y=125.0))
        True
    """
    x: float
    y: float
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def validate_positive_dimensions(cls, v: float) -> float:
        """Validate dimensions are positive."""
        if v <= 0:
            raise ValueError(f'Rectangle dimensions must be positive, got {v}')
        return v

    @computed_field
    @property
    def center(self) -> Point2D:
        """Center point of the rectangle."""
        return Point2D(
            x=self.x + self.width / 2,
            y=self.y + self.height / 2
        )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        """Check if a point is inside the rectangle (boundary included)."""
        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def contains_point(self, point: Point2D) -> bool:
        """Check if a point is inside the rectangle.

        Args:
            point: The point to check

        Returns:
            True if point is inside or on the boundary of the rectangle
        """
        return self.contains(point.x, point.y)

    def as_pygame_rect(self) -> Tuple[int, int, int, int]:
        """Integer (x, y, w, h) tuple for pygame.draw."""
        return (int(self.x), int(self.y), int(self.width), int(self.height))

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Rectangle(x={self.x:.2f}, y={self.y:.2f}, w={self.width:.2f}, h={self.height:.2f})"
