"""
Arrowhead geometry shared by every rendering surface.

Surfaces only differ in how they paint the three points (two strokes or a
filled triangle). The points themselves always come from ``arrowhead``.
"""
import math
from dataclasses import dataclass
from typing import Tuple

from annotated_image import config

Point = Tuple[float, float]


@dataclass(frozen=True)
class Arrowhead:
    """Tip and wing points of an arrowhead."""
    tip: Point
    left_wing: Point
    right_wing: Point

    def scaled(self, sx: float, sy: float) -> "Arrowhead":
        """Map the three points by a per-axis scale."""
        return Arrowhead(
            tip=(self.tip[0] * sx, self.tip[1] * sy),
            left_wing=(self.left_wing[0] * sx, self.left_wing[1] * sy),
            right_wing=(self.right_wing[0] * sx, self.right_wing[1] * sy),
        )


@dataclass(frozen=True)
class ArrowOutline:
    """Shaft endpoints plus arrowhead of one arrow."""
    origin: Point
    terminus: Point
    head: Arrowhead

    def scaled(self, sx: float, sy: float) -> "ArrowOutline":
        return ArrowOutline(
            origin=(self.origin[0] * sx, self.origin[1] * sy),
            terminus=(self.terminus[0] * sx, self.terminus[1] * sy),
            head=self.head.scaled(sx, sy),
        )


def arrowhead(
    origin: Point,
    terminus: Point,
    head_length: float,
    wing_angle_degrees: float = 30.0,
) -> Arrowhead:
    """
    Compute the arrowhead at ``terminus`` for a shaft coming from ``origin``.

    The formula is unit-agnostic; points come back in the caller's space.

    Args:
        origin: Shaft start (x, y)
        terminus: Shaft end (x, y), where the head sits
        head_length: Distance from the tip to each wing point
        wing_angle_degrees: Angle between the shaft and each wing

    Returns:
        Arrowhead with tip equal to terminus
    """
    angle = math.atan2(terminus[1] - origin[1], terminus[0] - origin[0])
    wing = math.radians(wing_angle_degrees)
    left_wing = (
        terminus[0] - head_length * math.cos(angle - wing),
        terminus[1] - head_length * math.sin(angle - wing),
    )
    right_wing = (
        terminus[0] - head_length * math.cos(angle + wing),
        terminus[1] - head_length * math.sin(angle + wing),
    )
    return Arrowhead(tip=(terminus[0], terminus[1]), left_wing=left_wing, right_wing=right_wing)


def arrow_outline(origin: Point, terminus: Point) -> ArrowOutline:
    """
    Outline of an arrow in normalized image space.

    Renderers project the result into their own space with
    ``ArrowOutline.scaled`` so head size relative to the shaft is identical
    on every surface.
    """
    head = arrowhead(
        origin,
        terminus,
        config.ARROW_HEAD_LENGTH,
        config.ARROW_WING_ANGLE_DEGREES,
    )
    return ArrowOutline(origin=tuple(origin), terminus=tuple(terminus), head=head)
