"""
turret.gui
==========

Radar Turret console – HTTP polling, live sweep, mode & config control

Key features
------------
• Half-disc radar with mode-coloured sweep line & glow
• Fading detection markers (frame- or time-based decay)
• Mode badge, START/STOP, four mode buttons, last-intrusion footer
• CONFIG dialog: range / lock time / angle limits with −/+ and sliders
• LOGS dialog: scrollable intrusion log, EXPORT to CSV, WIPE
• Yes/No confirmation before RESET and WIPE
• Red "DISCONNECTED" overlay & OFFLINE badge while polls fail;
  last known state stays on screen.
"""

from __future__ import annotations
import logging, time, pygame
from typing import Dict, Optional, Tuple

from turret import binder
from turret import constants as C
from turret.commands import CommandDispatcher
from turret.decay import DecayBuffer
from turret.device import DeviceLink
from turret.panels import ConfigPanel, LogPanel
from turret.renderer import Renderer
from turret.state import ViewState, mode_style
from turret.sync_client import SyncClient

CFG_ROWS = [("max_distance", "MAX RANGE (cm)"), ("lock_time_ms", "LOCK TIME (ms)"),
            ("min_angle", "MIN ANGLE"), ("max_angle", "MAX ANGLE")]
LOG_ROWS = 14                           # visible lines in the LOGS box


def _button(screen, rect, label, colour=C.WHITE, fill=None, font=None):
    font = font or C.FONT
    if fill is not None:
        pygame.draw.rect(screen, fill, rect)
    pygame.draw.rect(screen, colour, rect, 1)
    surf = font.render(label, True, C.BLACK if fill == colour else colour)
    screen.blit(surf, surf.get_rect(center=rect.center))


class RadarGUI:
    FPS = 60

    # ────────────────────────────────────────────────── INIT
    def __init__(self, cfg: dict) -> None:
        self.cfg = cfg

        # ―― Pygame window
        flags = pygame.RESIZABLE | (pygame.FULLSCREEN if cfg["fullscreen"] else 0)
        self.screen = pygame.display.set_mode(tuple(cfg["window"]), flags)
        pygame.display.set_caption("RADAR TURRET")
        self.clock = pygame.time.Clock()
        self.full_screen = bool(cfg["fullscreen"])

        # ―― Device & state
        link = DeviceLink(cfg["host"], float(cfg["timeout"]))
        self.poll_s = cfg["poll_ms"] / 1000
        self.view = ViewState()
        self.buffer = DecayBuffer()
        self.sync = SyncClient(link, self.view, self.buffer, self.poll_s,
                               on_update=self._on_status)
        self.commands = CommandDispatcher(link)

        # ―― Radar canvas
        self.renderer = Renderer(self._canvas_size())
        self.time_decay = cfg["decay"] == "time"
        self.t_last_draw = time.monotonic()
        self.renderer.draw(self.view, self.buffer)

        # ―― Dialogs
        self.config_panel = ConfigPanel(self.commands)
        self.log_panel = LogPanel(self.commands, C.ROOT / cfg["export_dir"])
        self.rects: Dict[str, pygame.Rect] = {}
        self.cfg_rects: Dict[str, pygame.Rect] = {}
        self.log_rects: Dict[str, pygame.Rect] = {}
        self.confirm_rects: Dict[str, pygame.Rect] = {}
        self.drag_field: Optional[str] = None

    # ───────────────────────────────────────── geometry helpers
    def _canvas_size(self) -> Tuple[int, int]:
        return max(100, min(self.screen.get_width() - 20, C.CANVAS_MAX_W)), C.CANVAS_H

    def _canvas_pos(self) -> Tuple[int, int]:
        w, h = self.renderer.surface.get_size()
        top = C.HEADER_H
        avail = self.screen.get_height() - C.HEADER_H - C.MODEBAR_H - C.FOOTER_H
        return (self.screen.get_width() - w) // 2, top + max(0, (avail - h) // 2)

    # ───────────────────────────────────────── poll callback
    def _on_status(self, view: ViewState) -> None:
        """One render pass per applied poll; ages the markers once."""
        now = time.monotonic()
        step = None
        if self.time_decay:
            step = (now - self.t_last_draw) * C.DECAY_STEP / self.poll_s
        self.t_last_draw = now
        self.renderer.draw(view, self.buffer, step)

    # ───────────────────────────────────────── operator actions
    def _open_config(self) -> None:
        self.log_panel.close(); self.config_panel.open()

    def _open_logs(self) -> None:
        self.config_panel.close(); self.log_panel.open()

    def _active_confirm(self):
        for panel in (self.config_panel, self.log_panel):
            if panel.visible and panel.pending:
                return panel
        return None

    # ───────────────────────────────────────── header
    def _draw_header(self):
        w = self.screen.get_width()
        title = C.FONT.render("RADAR", True, C.WHITE)
        self.screen.blit(title, (C.PAD, (C.HEADER_H - title.get_height()) // 2))

        text, col = binder.badge(self.view)
        surf = C.BADGE_FONT.render(text, True, col)
        br = surf.get_rect(midleft=(C.PAD + title.get_width() + 10, C.HEADER_H // 2)).inflate(10, 4)
        pygame.draw.rect(self.screen, col, br, 1)
        self.screen.blit(surf, surf.get_rect(center=br.center))

        x = w - C.PAD
        label, active = binder.toggle_label(self.view)
        for key, lbl, fill in [("config", "CONFIG", None), ("logs", "LOGS", None),
                               ("toggle", label, C.GREEN if active else None)]:
            r = pygame.Rect(0, 0, C.FONT.size(lbl)[0] + 20, 28)
            r.midright = (x, C.HEADER_H // 2)
            _button(self.screen, r, lbl, C.GREEN if fill else C.WHITE, fill)
            self.rects[key] = r; x = r.left - 8
        pygame.draw.line(self.screen, C.DIM, (0, C.HEADER_H - 1), (w, C.HEADER_H - 1))

    # ───────────────────────────────────────── mode bar & footer
    def _draw_mode_bar(self):
        w, h = self.screen.get_size()
        top = h - C.FOOTER_H - C.MODEBAR_H
        pygame.draw.line(self.screen, C.DIM, (0, top), (w, top))
        bw = (w - 2 * C.PAD - 3 * 8) // 4
        sel = binder.selected_mode(self.view)
        for i, (mode, lbl) in enumerate(binder.MODE_BUTTONS):
            r = pygame.Rect(C.PAD + i * (bw + 8), top + 12, bw, C.MODEBAR_H - 24)
            col = mode_style(mode)[1]
            _button(self.screen, r, lbl, col, C.SELECTED if mode == sel else None, C.SMALL_FONT)
            self.rects[f"mode{int(mode)}"] = r

        pygame.draw.line(self.screen, C.DIM, (0, h - C.FOOTER_H), (w, h - C.FOOTER_H))
        foot = C.SMALL_FONT.render(binder.footer_text(self.view), True, C.FAINT)
        self.screen.blit(foot, foot.get_rect(center=(w // 2, h - C.FOOTER_H // 2)))

    # ───────────────────────────────────────── CONFIG pop-up
    def _popup(self, w, h, title) -> pygame.Rect:
        rect = pygame.Rect((self.screen.get_width() - w) // 2,
                           (self.screen.get_height() - h) // 2, w, h)
        shade = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 242)); self.screen.blit(shade, (0, 0))
        pygame.draw.rect(self.screen, C.BLACK, rect); pygame.draw.rect(self.screen, C.WHITE, rect, 2)
        self.screen.blit(C.FONT.render(title, True, C.WHITE), (rect.x + 16, rect.y + 14))
        pygame.draw.line(self.screen, C.DIM, (rect.x + 16, rect.y + 38), (rect.right - 16, rect.y + 38))
        return rect

    def _draw_cfg_popup(self):
        rect = self._popup(min(420, self.screen.get_width() - 20), 270, "SETTINGS")
        snap = self.config_panel.snapshot
        self.cfg_rects = {}
        for i, (name, label) in enumerate(CFG_ROWS):
            y = rect.y + 52 + i * 40
            self.screen.blit(C.SMALL_FONT.render(label, True, C.WHITE), (rect.x + 16, y + 6))
            minus = pygame.Rect(rect.right - 210, y, 26, 26)
            slide = pygame.Rect(minus.right + 8, y + 10, 90, 6)
            plus = pygame.Rect(slide.right + 8, y, 26, 26)
            _button(self.screen, minus, "-", C.FAINT)
            _button(self.screen, plus, "+", C.FAINT)
            pygame.draw.rect(self.screen, C.DIM, slide)
            knob = pygame.Rect(0, 0, 8, 16)
            knob.center = (slide.left + int(snap.fraction(name) * slide.width), slide.centery)
            pygame.draw.rect(self.screen, C.WHITE, knob)
            val = C.SMALL_FONT.render(str(getattr(snap, name)), True, C.WHITE)
            self.screen.blit(val, val.get_rect(midright=(rect.right - 16, y + 13)))
            self.cfg_rects.update({f"{name}-": minus, f"{name}+": plus, f"{name}~": slide})

        x = rect.right - 16
        for key, lbl in [("close", "CLOSE"), ("save", "SAVE"), ("reset", "RESET")]:
            r = pygame.Rect(0, 0, 80, 30); r.bottomright = (x, rect.bottom - 14)
            _button(self.screen, r, lbl); self.cfg_rects[key] = r; x = r.left - 8

    # ───────────────────────────────────────── LOGS pop-up
    def _draw_log_popup(self):
        rect = self._popup(min(420, self.screen.get_width() - 20), 320, "INTRUSION LOGS")
        box = pygame.Rect(rect.x + 16, rect.y + 48, rect.width - 32, 200)
        pygame.draw.rect(self.screen, C.PANEL, box); pygame.draw.rect(self.screen, C.DIM, box, 1)
        panel = self.log_panel
        lines = panel.lines
        line_h = C.SMALL_FONT.get_linesize()
        for i, line in enumerate(lines[panel.scroll:panel.scroll + LOG_ROWS]):
            self.screen.blit(C.SMALL_FONT.render(line, True, (221, 221, 221)),
                             (box.x + 8, box.y + 6 + i * line_h))
        if panel.status:
            self.screen.blit(C.SMALL_FONT.render(panel.status, True, C.GREEN),
                             (rect.x + 16, box.bottom + 6))

        self.log_rects = {"box": box}
        x = rect.right - 16
        for key, lbl, col in [("close", "CLOSE", C.WHITE), ("wipe", "WIPE", C.RED),
                              ("export", "EXPORT", C.WHITE)]:
            r = pygame.Rect(0, 0, 80, 30); r.bottomright = (x, rect.bottom - 14)
            _button(self.screen, r, lbl, col); self.log_rects[key] = r; x = r.left - 8

    # ───────────────────────────────────────── confirmation box
    def _draw_confirm(self, question: str):
        rect = self._popup(300, 130, "CONFIRM")
        self.screen.blit(C.SMALL_FONT.render(question, True, C.WHITE), (rect.x + 16, rect.y + 50))
        no = pygame.Rect(0, 0, 70, 30); no.bottomright = (rect.right - 16, rect.bottom - 14)
        yes = no.move(-78, 0)
        _button(self.screen, yes, "YES", C.RED); _button(self.screen, no, "NO")
        self.confirm_rects = {"yes": yes, "no": no}

    # ───────────────────────────────────────── dialog events
    def _confirm_event(self, e, panel) -> None:
        if e.type == pygame.KEYDOWN:
            if e.key in (pygame.K_RETURN, pygame.K_y):
                panel.confirm()
            elif e.key in (pygame.K_ESCAPE, pygame.K_n):
                panel.cancel()
        elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1 and self.confirm_rects:
            if self.confirm_rects["yes"].collidepoint(e.pos):
                panel.confirm()
            elif self.confirm_rects["no"].collidepoint(e.pos):
                panel.cancel()

    def _slide_to(self, name: str, x: int) -> None:
        slide = self.cfg_rects[f"{name}~"]
        self.config_panel.snapshot.set_fraction(name, (x - slide.left) / slide.width)

    def _cfg_event(self, e) -> None:
        panel, r = self.config_panel, self.cfg_rects
        if e.type == pygame.KEYDOWN and e.key == pygame.K_ESCAPE:
            panel.close()
        elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1 and r:
            if r["save"].collidepoint(e.pos):
                panel.save()
            elif r["reset"].collidepoint(e.pos):
                panel.reset()
            elif r["close"].collidepoint(e.pos):
                panel.close()
            else:
                for name, _ in CFG_ROWS:
                    if r[f"{name}-"].collidepoint(e.pos):
                        panel.snapshot.adjust(name, -1)
                    elif r[f"{name}+"].collidepoint(e.pos):
                        panel.snapshot.adjust(name, +1)
                    elif r[f"{name}~"].inflate(8, 16).collidepoint(e.pos):
                        self.drag_field = name; self._slide_to(name, e.pos[0])
        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self.drag_field = None
        elif e.type == pygame.MOUSEMOTION and self.drag_field:
            self._slide_to(self.drag_field, e.pos[0])

    def _log_event(self, e) -> None:
        panel, r = self.log_panel, self.log_rects
        if e.type == pygame.KEYDOWN:
            if e.key == pygame.K_ESCAPE:
                panel.close()
            elif e.key in (pygame.K_UP, pygame.K_DOWN):
                panel.scroll_by(-1 if e.key == pygame.K_UP else 1, LOG_ROWS)
        elif e.type == pygame.MOUSEWHEEL:
            panel.scroll_by(-e.y, LOG_ROWS)
        elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1 and r:
            if r["export"].collidepoint(e.pos):
                panel.export()
            elif r["wipe"].collidepoint(e.pos):
                panel.wipe()
            elif r["close"].collidepoint(e.pos):
                panel.close()

    # ───────────────────────────────────────── main window events
    def _main_event(self, e) -> bool:
        """Returns False when the operator quits."""
        if e.type == pygame.KEYDOWN:
            if e.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
            elif e.key == pygame.K_SPACE:
                self.commands.toggle()
            elif pygame.K_1 <= e.key <= pygame.K_4:
                self.commands.set_mode(e.key - pygame.K_1)
            elif e.key == pygame.K_c:
                self._open_config()
            elif e.key == pygame.K_l:
                self._open_logs()
            elif e.key == pygame.K_f:
                pygame.display.toggle_fullscreen()
                self.full_screen = not self.full_screen
        elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            r = self.rects
            if "toggle" in r and r["toggle"].collidepoint(e.pos):
                self.commands.toggle()
            elif "logs" in r and r["logs"].collidepoint(e.pos):
                self._open_logs()
            elif "config" in r and r["config"].collidepoint(e.pos):
                self._open_config()
            else:
                for mode, _ in binder.MODE_BUTTONS:
                    key = f"mode{int(mode)}"
                    if key in r and r[key].collidepoint(e.pos):
                        self.commands.set_mode(int(mode))
        return True

    # ───────────────────────────────────────── MAIN LOOP
    def run(self):
        self.sync.start()
        running = True
        while running:
            self.clock.tick(self.FPS)

            # ――― EVENTS ―――――――――――――――――――――――――――――――――――――――――――
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    running = False
                elif e.type == pygame.VIDEORESIZE and not self.full_screen:
                    self.screen = pygame.display.set_mode(e.size, pygame.RESIZABLE)
                    self.cfg["window"] = list(e.size)
                    self.renderer.resize(self._canvas_size())
                    self.renderer.draw(self.view, self.buffer, 0)
                elif self._active_confirm() is not None:
                    self._confirm_event(e, self._active_confirm())
                elif self.config_panel.visible:
                    self._cfg_event(e)
                elif self.log_panel.visible:
                    self._log_event(e)
                elif not self._main_event(e):
                    running = False

            # ――― NETWORK ――――――――――――――――――――――――――――――――――――――――――
            self.sync.update()
            self.commands.pump()

            # ――― DRAWING ――――――――――――――――――――――――――――――――――――――――――
            self.screen.fill(C.BLACK)
            self._draw_header()
            self.screen.blit(self.renderer.surface, self._canvas_pos())
            self._draw_mode_bar()
            if self.config_panel.visible: self._draw_cfg_popup()
            if self.log_panel.visible: self._draw_log_popup()
            panel = self._active_confirm()
            if panel is not None:
                self._draw_confirm(panel.question)
            else:
                self.confirm_rects = {}
            pygame.display.flip()

        # graceful shutdown
        logging.info("Shutting down...")
        self.cfg["fullscreen"] = self.full_screen
        self.sync.stop()
        self.commands.stop()
        pygame.quit()
