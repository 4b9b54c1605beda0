# Required before importing pygame, otherwise screen might flicker during tests
import os
os.environ["SDL_VIDEODRIVER"] = "dummy"

import unittest
from unittest.mock import patch

import pygame

from turret.gui import RadarGUI


def _cfg(**overrides):
    cfg = {"host": "http://turret.test", "poll_ms": 100, "timeout": 1.0,
           "decay": "frame", "window": [540, 470], "fullscreen": False,
           "export_dir": "log"}
    cfg.update(overrides)
    return cfg


def _key(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=0, unicode="")


def _click(pos):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos)


@patch("turret.gui.CommandDispatcher")
@patch("turret.gui.SyncClient")
class TestRadarGUI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        pygame.init()

    def _make(self, **overrides):
        app = RadarGUI(_cfg(**overrides))
        # draw one frame so hit rects exist
        app._draw_header()
        app._draw_mode_bar()
        return app

    def test_canvas_fits_window(self, mock_sync, mock_cmd):
        app = self._make()
        self.assertEqual(app.renderer.surface.get_size(), (500, 260))

    def test_hotkeys(self, mock_sync, mock_cmd):
        app = self._make()
        app._main_event(_key(pygame.K_SPACE))
        app._main_event(_key(pygame.K_3))
        app.commands.toggle.assert_called_once_with()
        app.commands.set_mode.assert_called_once_with(2)
        self.assertFalse(app._main_event(_key(pygame.K_q)))

    def test_mode_button_click(self, mock_sync, mock_cmd):
        app = self._make()
        app._main_event(_click(app.rects["mode3"].center))
        app.commands.set_mode.assert_called_once_with(3)

    def test_config_button_opens_dialog(self, mock_sync, mock_cmd):
        app = self._make()
        app._main_event(_click(app.rects["config"].center))
        self.assertTrue(app.config_panel.visible)
        app.commands.fetch_config.assert_called_once()

    def test_config_dialog_save_closes(self, mock_sync, mock_cmd):
        app = self._make()
        app._open_config()
        app._draw_cfg_popup()
        app._cfg_event(_click(app.cfg_rects["max_distance+"].center))
        self.assertEqual(app.config_panel.snapshot.max_distance, 55)
        app._cfg_event(_click(app.cfg_rects["save"].center))
        self.assertFalse(app.config_panel.visible)
        app.commands.save_config.assert_called_once()

    def test_log_wipe_goes_through_confirmation(self, mock_sync, mock_cmd):
        app = self._make()
        app._open_logs()
        app._draw_log_popup()
        app._log_event(_click(app.log_rects["wipe"].center))
        app.commands.clear_logs.assert_not_called()
        self.assertIs(app._active_confirm(), app.log_panel)

        app._draw_confirm(app.log_panel.question)
        app._confirm_event(_click(app.confirm_rects["yes"].center), app.log_panel)
        app.commands.clear_logs.assert_called_once_with()

    def test_time_decay_step(self, mock_sync, mock_cmd):
        app = self._make(decay="time")
        app.buffer.record(90, 30)
        app.t_last_draw -= 0.5
        app._on_status(app.view)
        # half a second at 0.02 per 100 ms
        self.assertAlmostEqual(app.buffer.snapshot()[0].life, 0.9, places=2)

    def test_frame_decay_step(self, mock_sync, mock_cmd):
        app = self._make()
        app.buffer.record(90, 30)
        app.t_last_draw -= 5
        app._on_status(app.view)
        self.assertAlmostEqual(app.buffer.snapshot()[0].life, 0.98)


if __name__ == "__main__":
    unittest.main()
