# Required before importing pygame, otherwise screen might flicker during tests
import os
os.environ["SDL_VIDEODRIVER"] = "dummy"

import unittest

import pygame

from turret import constants as C
from turret.decay import DecayBuffer
from turret.renderer import Renderer, marker_position, marker_radius, polar_to_xy
from turret.state import ViewState


class TestGeometry(unittest.TestCase):
    def test_polar_to_xy_points_up_at_90(self):
        x, y = polar_to_xy((100, 100), 50, 90)
        self.assertAlmostEqual(x, 100)
        self.assertAlmostEqual(y, 50)

    def test_polar_to_xy_right_and_left(self):
        self.assertAlmostEqual(polar_to_xy((100, 100), 50, 0)[0], 150)
        self.assertAlmostEqual(polar_to_xy((100, 100), 50, 180)[0], 50)

    def test_marker_radius_grows_as_life_drops(self):
        self.assertEqual(marker_radius(1.0), 4)
        self.assertEqual(marker_radius(0.5), 6)
        self.assertEqual(marker_radius(0.0), 8)

    def test_marker_position_scales_by_range(self):
        x, y = marker_position((250, 255), 245, 50, 90, 30)
        self.assertAlmostEqual(x, 250)
        self.assertAlmostEqual(y, 255 - 0.6 * 245)

    def test_marker_beyond_radius_is_skipped(self):
        self.assertIsNone(marker_position((250, 255), 245, 50, 90, 51))

    def test_marker_at_zero_distance_is_skipped(self):
        self.assertIsNone(marker_position((250, 255), 245, 50, 90, 0))

    def test_zero_range_falls_back_to_default(self):
        self.assertEqual(marker_position((250, 255), 245, 0, 90, 30),
                         marker_position((250, 255), 245, C.DEFAULT_RANGE, 90, 30))


class TestRenderer(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        pygame.init()

    def setUp(self):
        self.renderer = Renderer((500, 260))
        self.buffer = DecayBuffer()
        self.view = ViewState(scan_angle=90, max_range=50, mode=0,
                              running=True, connected=True)

    def test_layout(self):
        self.assertEqual(self.renderer.origin, (250, 255))
        self.assertEqual(self.renderer.radius, 245)

    def test_detection_scenario(self):
        self.buffer.record(90, 30)
        surface = self.renderer.draw(self.view, self.buffer)

        self.assertEqual(self.renderer.sweep_colour, C.GREEN)
        self.assertEqual(len(self.renderer.markers), 1)
        (x, y), radius, alpha = self.renderer.markers[0]
        self.assertAlmostEqual(x, 250)
        self.assertAlmostEqual(255 - y, 0.6 * 245)
        self.assertAlmostEqual(radius, 4.08)
        self.assertEqual(alpha, int(255 * 0.98))

        # sweep line straight up, above the marker
        self.assertEqual(tuple(surface.get_at((250, 40)))[:3], C.GREEN)

    def test_draw_ticks_buffer_once(self):
        self.buffer.record(90, 30)
        self.renderer.draw(self.view, self.buffer)
        self.assertAlmostEqual(self.buffer.snapshot()[0].life, 0.98)
        self.renderer.draw(self.view, self.buffer)
        self.assertAlmostEqual(self.buffer.snapshot()[0].life, 0.96)

    def test_draw_with_explicit_step(self):
        self.buffer.record(90, 30)
        self.renderer.draw(self.view, self.buffer, 0.25)
        self.assertAlmostEqual(self.buffer.snapshot()[0].life, 0.75)

    def test_out_of_range_detection_not_drawn(self):
        self.buffer.record(90, 80)
        self.renderer.draw(self.view, self.buffer)
        self.assertEqual(self.renderer.markers, [])
        self.assertEqual(len(self.buffer), 1)

    def test_zero_max_range_does_not_crash(self):
        self.view.max_range = 0
        self.buffer.record(45, 25)
        self.renderer.draw(self.view, self.buffer)
        self.assertEqual(len(self.renderer.markers), 1)

    def test_mode_colours(self):
        for mode, colour in [(1, C.GRAY), (2, C.RED), (3, C.MAGENTA)]:
            self.view.mode = mode
            self.renderer.draw(self.view, self.buffer)
            self.assertEqual(self.renderer.sweep_colour, colour)

    def test_unknown_mode_falls_back_to_green(self):
        for mode in (4, -1, 250):
            self.view.mode = mode
            self.renderer.draw(self.view, self.buffer)
            self.assertEqual(self.renderer.sweep_colour, C.GREEN)

    def test_offline_label(self):
        self.view.connected = False
        surface = self.renderer.draw(self.view, self.buffer)
        self.assertTrue(self.renderer.offline_shown)

        cx, cy = self.renderer.origin
        area = pygame.Rect(0, 0, 160, 24)
        area.center = (int(cx), int(cy - 40))
        red = [
            (x, y) for x in range(area.left, area.right)
            for y in range(area.top, area.bottom)
            if surface.get_at((x, y)).r > 200 and surface.get_at((x, y)).g < 60
        ]
        self.assertTrue(red)

    def test_no_offline_label_when_connected(self):
        self.renderer.draw(self.view, self.buffer)
        self.assertFalse(self.renderer.offline_shown)

    def test_resize_recomputes_layout(self):
        self.renderer.resize((300, 200))
        self.assertEqual(self.renderer.surface.get_size(), (300, 200))
        self.assertEqual(self.renderer.origin, (150, 195))
        self.assertEqual(self.renderer.radius, 185)


if __name__ == "__main__":
    unittest.main()
