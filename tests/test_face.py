from __future__ import annotations

import unittest
from datetime import datetime

from aclock import face
from aclock.face import (
    ClockTime,
    FaceOptions,
    HandLengths,
    TerminalDimensions,
    dial_geometry,
    hand_angles,
    render_face,
)


def _roles(buffer, role):
    return {
        (x, y)
        for y, row in enumerate(buffer.rows)
        for x, cell in enumerate(row)
        if cell.role == role
    }


class HandAngleTests(unittest.TestCase):
    def test_midnight_is_all_zero(self) -> None:
        angles = hand_angles(ClockTime(0, 0, 0))
        self.assertEqual((angles.hour, angles.minute, angles.second), (0.0, 0.0, 0.0))

    def test_half_past_midnight(self) -> None:
        angles = hand_angles(ClockTime(0, 30, 0))
        self.assertAlmostEqual(angles.minute, 180.0)
        self.assertAlmostEqual(angles.hour, 15.0)
        self.assertAlmostEqual(angles.second, 0.0)

    def test_afternoon_wraps_to_twelve_hour_dial(self) -> None:
        self.assertAlmostEqual(hand_angles(ClockTime(15, 0, 0)).hour, 90.0)
        self.assertAlmostEqual(hand_angles(ClockTime(12, 0, 0)).hour, 0.0)

    def test_second_hand_uses_fraction(self) -> None:
        angles = hand_angles(ClockTime(0, 0, 15, 0.5))
        self.assertAlmostEqual(angles.second, 93.0)
        # Minute hand only advances with whole seconds
        self.assertAlmostEqual(angles.minute, 15 / 60 / 60 * 360)

    def test_angles_stay_below_full_turn(self) -> None:
        for hour in range(24):
            for minute in range(60):
                for second, fraction in ((0, 0.0), (59, 0.999999)):
                    angles = hand_angles(ClockTime(hour, minute, second, fraction))
                    for value in (angles.hour, angles.minute, angles.second):
                        self.assertGreaterEqual(value, 0.0)
                        self.assertLess(value, 360.0)

    def test_from_datetime_keeps_fraction_only_when_smooth(self) -> None:
        dt = datetime(2024, 1, 1, 13, 45, 30, 250000)
        self.assertEqual(ClockTime.from_datetime(dt), ClockTime(13, 45, 30, 0.0))
        self.assertEqual(ClockTime.from_datetime(dt, smooth=True), ClockTime(13, 45, 30, 0.25))


class DialGeometryTests(unittest.TestCase):
    def test_square_window_with_neutral_aspect_is_circular(self) -> None:
        for size in (4, 9, 30, 101):
            dims = TerminalDimensions(size, size)
            fill = dial_geometry(dims, shape="fill")
            self.assertEqual(fill.radius_x, fill.radius_y)
            round_ = dial_geometry(dims, shape="round", cell_aspect=1.0)
            self.assertEqual(round_.radius_x, round_.radius_y)

    def test_wide_window_gives_wide_dial(self) -> None:
        dims = TerminalDimensions(120, 20)
        for shape in face.SHAPES:
            geometry = dial_geometry(dims, shape=shape)
            self.assertGreater(geometry.radius_x, geometry.radius_y)

    def test_fill_radii_and_center(self) -> None:
        geometry = dial_geometry(TerminalDimensions(40, 20))
        self.assertEqual((geometry.center_x, geometry.center_y), (19, 9))
        self.assertEqual((geometry.radius_x, geometry.radius_y), (18.0, 8.0))

    def test_round_applies_cell_aspect(self) -> None:
        geometry = dial_geometry(TerminalDimensions(80, 24), shape="round", cell_aspect=2.0)
        self.assertEqual(geometry.radius_y, 10.0)
        self.assertEqual(geometry.radius_x, 20.0)

    def test_scale_shrinks_both_radii(self) -> None:
        geometry = dial_geometry(TerminalDimensions(40, 20), scale=0.5)
        self.assertEqual((geometry.radius_x, geometry.radius_y), (9.0, 4.0))

    def test_tiny_and_negative_windows_clamp_to_zero(self) -> None:
        self.assertTrue(dial_geometry(TerminalDimensions(2, 2)).empty)
        geometry = dial_geometry(TerminalDimensions(-3, -7))
        self.assertEqual((geometry.center_x, geometry.center_y), (0, 0))
        self.assertTrue(geometry.empty)

    def test_unknown_shape(self) -> None:
        with self.assertRaises(ValueError):
            dial_geometry(TerminalDimensions(10, 10), shape="square")


class RenderFaceTests(unittest.TestCase):
    def test_buffer_matches_window_size(self) -> None:
        for width, height in ((1, 1), (3, 7), (4, 4), (40, 20), (81, 25), (200, 5)):
            buffer = render_face(ClockTime(10, 8, 42), TerminalDimensions(width, height))
            self.assertEqual((buffer.width, buffer.height), (width, height))
            self.assertEqual(len(buffer.rows), height)
            for row in buffer.rows:
                self.assertEqual(len(row), width)

    def test_zero_sized_windows_do_not_raise(self) -> None:
        t = ClockTime(3, 0, 0)
        self.assertEqual(render_face(t, TerminalDimensions(0, 0)).rows, ())
        self.assertEqual(render_face(t, TerminalDimensions(0, 5)).rows, ((),) * 5)
        self.assertEqual(render_face(t, TerminalDimensions(5, 0)).rows, ())
        self.assertEqual(render_face(t, TerminalDimensions(-4, 3)).rows, ((),) * 3)

    def test_tiny_window_gets_placeholder(self) -> None:
        buffer = render_face(ClockTime(3, 0, 0), TerminalDimensions(3, 3))
        self.assertEqual(buffer.lines(), ["   ", " " + face.PLACEHOLDER + " ", "   "])

    def test_zero_radius_draws_no_hands(self) -> None:
        buffer = render_face(ClockTime(3, 0, 0), TerminalDimensions(40, 20), FaceOptions(scale=0.0))
        self.assertTrue(all(cell == face.BLANK for row in buffer.rows for cell in row))

    def test_smallest_dial(self) -> None:
        # 4x4 leaves no room inside the margin, 5x5 is the first real dial
        blank = render_face(ClockTime(3, 0, 0), TerminalDimensions(4, 4))
        self.assertTrue(all(cell == face.BLANK for row in blank.rows for cell in row))
        buffer = render_face(ClockTime(3, 0, 0), TerminalDimensions(5, 5))
        self.assertTrue(_roles(buffer, "face") or _roles(buffer, "hour") or _roles(buffer, "label"))

    def test_margin_is_kept_on_every_side(self) -> None:
        for width, height in ((40, 20), (41, 21), (80, 24), (13, 7)):
            buffer = render_face(ClockTime(3, 0, 0), TerminalDimensions(width, height))
            lines = buffer.lines()
            self.assertEqual(lines[0].strip(), "", (width, height))
            self.assertEqual(lines[-1].strip(), "", (width, height))
            self.assertTrue(all(line[0] == " " for line in lines), (width, height))
            self.assertTrue(all(line[-1] == " " for line in lines), (width, height))

    def test_odd_window_dial_is_symmetric(self) -> None:
        geometry = dial_geometry(TerminalDimensions(41, 21))
        self.assertEqual((geometry.center_x, geometry.center_y), (20, 10))
        left, _ = face.point_on_dial(geometry, 270.0, 1.0)
        right, _ = face.point_on_dial(geometry, 90.0, 1.0)
        _, top = face.point_on_dial(geometry, 0.0, 1.0)
        _, bottom = face.point_on_dial(geometry, 180.0, 1.0)
        self.assertEqual((left, 40 - right), (1, 1))
        self.assertEqual((top, 20 - bottom), (1, 1))

    def test_rendering_is_deterministic(self) -> None:
        t = ClockTime(7, 21, 13, 0.4)
        dims = TerminalDimensions(97, 31)
        self.assertEqual(render_face(t, dims), render_face(t, dims))

    def test_three_oclock_on_square_terminal(self) -> None:
        buffer = render_face(ClockTime(3, 0, 0), TerminalDimensions(40, 20))

        # Hour hand runs horizontally right of the center
        hour = _roles(buffer, "hour")
        self.assertIn((19, 9), hour)
        self.assertTrue({(x, 9) for x in range(20, 29)} <= hour)
        self.assertTrue(all(y == 9 and x >= 19 for x, y in hour))

        # Minute and second hands go straight up
        minute = _roles(buffer, "minute")
        second = _roles(buffer, "second")
        self.assertEqual(minute, {(19, y) for y in range(3, 9)})
        self.assertEqual(second, {(19, 2)})

        # Nothing drawn between the 9 o'clock tick and the center
        self.assertTrue(all(buffer.cell(x, 9).role is None for x in range(5, 19)))

    def test_hidden_second_hand(self) -> None:
        options = FaceOptions(show_second_hand=False)
        buffer = render_face(ClockTime(3, 0, 0), TerminalDimensions(40, 20), options)
        self.assertEqual(_roles(buffer, "second"), set())
        self.assertEqual(buffer.cell(19, 2).role, "label")

    def test_hands_follow_the_ellipse(self) -> None:
        # Each axis is scaled by its own radius
        x, y = face.point_on_dial(dial_geometry(TerminalDimensions(100, 20)), 45.0, 1.0)
        self.assertEqual((x, y), (83, 3))

    def test_minute_labels_add_ticks(self) -> None:
        dims = TerminalDimensions(120, 40)
        t = ClockTime(0, 0, 0)
        plain = _roles(render_face(t, dims), "label")
        detailed = _roles(render_face(t, dims, FaceOptions(show_minute_labels=True)), "label")
        self.assertGreater(len(detailed), len(plain))

    def test_outline_has_no_gaps(self) -> None:
        for dims in (TerminalDimensions(80, 24), TerminalDimensions(13, 5), TerminalDimensions(300, 90)):
            points = list(face.ellipse_points(dial_geometry(dims)))
            for (x0, y0), (x1, y1) in zip(points, points[1:]):
                self.assertLessEqual(abs(x1 - x0), 1)
                self.assertLessEqual(abs(y1 - y0), 1)


class BresenhamTests(unittest.TestCase):
    def test_includes_both_ends(self) -> None:
        self.assertEqual(list(face.bresenham(2, 3, 5, 3)), [(2, 3), (3, 3), (4, 3), (5, 3)])
        self.assertEqual(list(face.bresenham(1, 1, 1, 1)), [(1, 1)])

    def test_diagonal(self) -> None:
        self.assertEqual(list(face.bresenham(3, 3, 0, 0)), [(3, 3), (2, 2), (1, 1), (0, 0)])


class HandLengthTests(unittest.TestCase):
    def test_defaults_are_ordered(self) -> None:
        HandLengths().validate()

    def test_rejects_unordered_lengths(self) -> None:
        for lengths in (
            HandLengths(hour=0.8, minute=0.7, second=0.9),
            HandLengths(hour=0.5, minute=0.9, second=0.9),
            HandLengths(hour=0.0, minute=0.5, second=0.9),
            HandLengths(hour=0.5, minute=0.75, second=1.2),
        ):
            with self.assertRaises(ValueError):
                lengths.validate()


if __name__ == "__main__":
    unittest.main()
