import cv2
import numpy as np
from typing import Optional

from pathtracker.core.telemetry.loggers.tracking_logger import get_tracking_logger
from pathtracker.core.tracking.track_state import TrackState
from pathtracker.presentation.path_projection import scale_path_to_viewport
from pathtracker.utils.config_sections import PathViewConfig, load_path_view_config


class OpenCVPathView:
    """
    OpenCV window plotting the estimated path.

    Layout:
      [path plot, gray border]
      [Steps: N]  [TRACKING / IDLE]
    """

    FOOTER_HEIGHT = 40

    def __init__(self, config: Optional[PathViewConfig] = None, headless: bool = False):
        self.config = config or load_path_view_config()
        self.headless = headless
        self.window_name = self.config.window_name
        self.canvas_w = self.config.width
        self.canvas_h = self.config.height + self.FOOTER_HEIGHT
        self.frames_rendered = 0
        self._window_open = False
        self._log = get_tracking_logger().view

    def render(self, state: TrackState) -> np.ndarray:
        """Draw ``state`` on a fresh BGR canvas and return it."""
        canvas = np.full((self.canvas_h, self.canvas_w, 3), 255, dtype=np.uint8)
        plot_h = self.config.height

        # Plot border
        cv2.rectangle(canvas, (0, 0), (self.canvas_w - 1, plot_h - 1), (128, 128, 128), 1)

        scaled, _ = scale_path_to_viewport(
            state.path, self.canvas_w, plot_h, padding=self.config.padding
        )
        if scaled:
            pts = np.round(np.array(scaled)).astype(np.int32).reshape((-1, 1, 2))
            if len(scaled) == 1:
                cv2.circle(canvas, tuple(int(v) for v in pts[0, 0]), self.config.line_thickness,
                           self.config.line_color, -1)
            else:
                cv2.polylines(canvas, [pts], False, self.config.line_color,
                              self.config.line_thickness, lineType=cv2.LINE_AA)

        # Footer
        cv2.putText(canvas, f"Steps: {state.step_count}", (10, plot_h + 28),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 0, 0), 2)
        status, color = ("TRACKING", (0, 160, 0)) if state.is_tracking else ("IDLE", (128, 128, 128))
        cv2.putText(canvas, status, (self.canvas_w - 140, plot_h + 28),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2)

        self.frames_rendered += 1
        return canvas

    def show(self, state: TrackState) -> int:
        """Render and display; returns the pressed key, 0xFF when none or headless."""
        canvas = self.render(state)
        if self.headless:
            return 0xFF

        if not self._window_open:
            cv2.namedWindow(self.window_name, cv2.WINDOW_NORMAL)
            cv2.resizeWindow(self.window_name, self.canvas_w, self.canvas_h)
            self._window_open = True
            self._log.debug(f"Path view window '{self.window_name}' opened")

        cv2.imshow(self.window_name, canvas)
        return cv2.waitKey(1) & 0xFF

    def close(self):
        """Close the window"""
        if self._window_open:
            cv2.destroyWindow(self.window_name)
            self._window_open = False
        self._log.debug(f"Path view closed after {self.frames_rendered} frames")
