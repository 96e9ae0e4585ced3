"""Geometry codec — scanned elements → sketch entities.

Every point goes through the same mapping: element transform, then global
``scale``, then Y flip (``y' = -y``). Radii are scaled by ``scale`` times
the transform's axis scale factor. Ids are ``"<kind>_<n>"`` with a single
counter shared by all kinds, so they are unique and increasing within one
call.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable

from svgsketch.engine.config import PipelineConfig
from svgsketch.models.elements import (
    CircleElement,
    Element,
    EllipseElement,
    LineElement,
    PathElement,
    RectElement,
    TextElement,
)
from svgsketch.models.entities import Bezier, Circle, Ellipse, LineSegment, SketchEntity, Text
from svgsketch.models.path_commands import ClosePath, CubicTo, LineTo, MoveTo, Point
from svgsketch.svg import path_parser
from svgsketch.svg.transform import Matrix2x3
from svgsketch.utils.geometry import unit_vector

logger = logging.getLogger(__name__)


class _EntityBuilder:
    """Accumulates entities for one ``build`` call."""

    def __init__(self, scale: float, config: PipelineConfig, reflect_smooth: bool) -> None:
        self.scale = scale
        self.config = config
        self.reflect_smooth = reflect_smooth
        self.entities: list[SketchEntity] = []
        self._counter = 0
        self._handlers: dict[type[Element], Callable[[Element], None]] = {
            LineElement: self._line,
            RectElement: self._rect,
            CircleElement: self._circle,
            EllipseElement: self._ellipse,
            PathElement: self._path,
        }
        self.dropped = 0

    # -- helpers -----------------------------------------------------------

    def next_id(self, kind: str) -> str:
        self._counter += 1
        return f"{kind}_{self._counter}"

    def to_sketch(self, transform: Matrix2x3, x: float, y: float) -> Point:
        tx, ty = transform.apply(x, y)
        # + 0.0 turns the flipped -0.0 into 0.0
        return (tx * self.scale + 0.0, -ty * self.scale + 0.0)

    def reject_non_finite(self, what: str, *values: float) -> bool:
        """True (and counted as dropped) if any value overflowed to inf or NaN."""
        if all(math.isfinite(v) for v in values):
            return False
        logger.debug("Dropping %s with non-finite geometry", what)
        self.dropped += 1
        return True

    @staticmethod
    def provenance(el: Element) -> dict:
        return {"group_key": el.source_group_key, "group_instance": el.source_use_index}

    def add_segment(self, start: Point, end: Point, el: Element) -> None:
        """Line between two sketch-space points, in midpoint/direction form."""
        if self.reject_non_finite("segment", *start, *end):
            return
        direction, length = unit_vector(end[0] - start[0], end[1] - start[1])
        if self.reject_non_finite("segment", length):
            return
        if length < self.config.degenerate_length:
            logger.debug("Dropping zero-length segment at (%g, %g)", start[0], start[1])
            self.dropped += 1
            return
        half = length / 2.0
        self.entities.append(
            LineSegment(
                id=self.next_id(LineSegment.kind),
                midpoint=(start[0] + direction[0] * half, start[1] + direction[1] * half),
                direction=direction,
                start_param=-half,
                end_param=half,
                is_construction=el.is_construction,
                **self.provenance(el),
            )
        )

    # -- element handlers --------------------------------------------------

    def add(self, el: Element) -> None:
        handler = self._handlers.get(type(el))
        if handler is None:
            return
        handler(el)

    def _line(self, el: LineElement) -> None:
        self.add_segment(
            self.to_sketch(el.transform, el.x1, el.y1),
            self.to_sketch(el.transform, el.x2, el.y2),
            el,
        )

    def _rect(self, el: RectElement) -> None:
        corners = [
            (el.x, el.y),
            (el.x + el.width, el.y),
            (el.x + el.width, el.y + el.height),
            (el.x, el.y + el.height),
        ]
        points = [self.to_sketch(el.transform, x, y) for x, y in corners]
        for i, start in enumerate(points):
            self.add_segment(start, points[(i + 1) % 4], el)

    def _circle(self, el: CircleElement) -> None:
        radius = el.r * self.scale * el.transform.x_scale
        center = self.to_sketch(el.transform, el.cx, el.cy)
        if self.reject_non_finite("circle", radius, *center):
            return
        if radius <= self.config.degenerate_length:
            logger.debug("Dropping circle with radius %g", el.r)
            self.dropped += 1
            return
        self.entities.append(
            Circle(
                id=self.next_id(Circle.kind),
                center=center,
                radius=radius,
                is_construction=el.is_construction,
                **self.provenance(el),
            )
        )

    def _ellipse(self, el: EllipseElement) -> None:
        t = el.transform
        rx = el.rx * self.scale * t.x_scale
        ry = el.ry * self.scale * t.y_scale
        center = self.to_sketch(t, el.cx, el.cy)
        if self.reject_non_finite("ellipse", rx, ry, *center):
            return
        if min(rx, ry) <= self.config.degenerate_length:
            logger.debug("Dropping ellipse with radii %g, %g", el.rx, el.ry)
            self.dropped += 1
            return
        # Image of the major axis after the Y flip
        axis = (t.a, -t.b) if rx >= ry else (t.c, -t.d)
        direction, _ = unit_vector(*axis)
        self.entities.append(
            Ellipse(
                id=self.next_id(Ellipse.kind),
                center=center,
                major_radius=max(rx, ry),
                minor_radius=min(rx, ry),
                major_direction=direction,
                is_construction=el.is_construction,
                **self.provenance(el),
            )
        )

    def _path(self, el: PathElement) -> None:
        commands = path_parser.parse(el.d, reflect_smooth=self.reflect_smooth)
        current: Point | None = None
        subpath_start: Point | None = None

        for cmd in commands:
            if isinstance(cmd, MoveTo):
                current = subpath_start = self.to_sketch(el.transform, *cmd.point)
                continue
            if current is None:
                # Drawing before any move starts at the origin
                current = subpath_start = self.to_sketch(el.transform, 0.0, 0.0)

            if isinstance(cmd, LineTo):
                end = self.to_sketch(el.transform, *cmd.point)
                self.add_segment(current, end, el)
                current = end
            elif isinstance(cmd, CubicTo):
                end = self.to_sketch(el.transform, *cmd.point)
                points = (
                    current,
                    self.to_sketch(el.transform, *cmd.c1),
                    self.to_sketch(el.transform, *cmd.c2),
                    end,
                )
                current = end
                if self.reject_non_finite("curve", *(v for p in points for v in p)):
                    continue
                self.entities.append(
                    Bezier(
                        id=self.next_id(Bezier.kind),
                        control_points=points,
                        is_construction=el.is_construction,
                        **self.provenance(el),
                    )
                )
            elif isinstance(cmd, ClosePath):
                if math.dist(current, subpath_start) >= self.config.degenerate_length:
                    self.add_segment(current, subpath_start, el)
                current = subpath_start

    # -- text --------------------------------------------------------------

    def text_width(self, content: str, font_size: float) -> float:
        return len(content) * font_size * self.config.char_width_ratio

    def add_text(self, content: str, x: float, y: float, el: TextElement) -> None:
        if not content.strip():
            return
        baseline = self.to_sketch(el.transform, x, y)
        ascent = el.font_size * self.scale * el.transform.x_scale
        if self.reject_non_finite("text", ascent, *baseline):
            return
        self.entities.append(
            Text(
                id=self.next_id(Text.kind),
                baseline_start=baseline,
                ascent=ascent,
                content=content,
                font=el.font_family,
            )
        )

    def anchored_x(self, content: str, x: float, el: TextElement) -> float:
        width = self.text_width(content, el.font_size)
        if el.text_anchor == "middle":
            return x - width / 2.0
        if el.text_anchor == "end":
            return x - width
        return x

    def text(self, el: TextElement) -> None:
        if el.text_paths:
            advance = el.font_size * self.config.char_width_ratio
            for span in el.text_paths:
                for i, ch in enumerate(span.content):
                    if ch.isspace():
                        continue
                    self.add_text(ch, el.x + span.start_offset + i * advance, el.y, el)
            return

        positioned = any(
            s.x is not None or s.y is not None or s.dx or s.dy for s in el.tspans
        )
        if not positioned:
            self.add_text(el.content, self.anchored_x(el.content, el.x, el), el.y, el)
            return

        x, y = el.x, el.y
        for span in el.tspans:
            if span.x is not None:
                x = span.x
            if span.y is not None:
                y = span.y
            x += span.dx
            y += span.dy
            self.add_text(span.content, self.anchored_x(span.content, x, el), y, el)
            # Following spans without an explicit x continue after this one
            x += self.text_width(span.content, el.font_size)


def build(
    elements: list[Element],
    text_elements: list[TextElement] | None = None,
    scale: float = 1.0,
    config: PipelineConfig | None = None,
    reflect_smooth: bool = False,
) -> list[SketchEntity]:
    """Encode every visible element (and text) as sketch entities.

    Hidden elements (inside ``<defs>`` / ``<symbol>``) and ``<use>``
    references are skipped; their expanded clones are visible elements.
    """
    builder = _EntityBuilder(scale, config or PipelineConfig(), reflect_smooth)

    for el in elements:
        if el.is_hidden:
            continue
        builder.add(el)

    for text_el in text_elements or []:
        if text_el.is_hidden:
            continue
        builder.text(text_el)

    if builder.dropped:
        logger.debug("Dropped %d degenerate entities", builder.dropped)
    logger.info("Geometry encoding: %d entities", len(builder.entities))
    return builder.entities
