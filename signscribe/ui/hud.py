"""
SignScribe HUD.
Visualizes the commit engine: confidence, dwell progress and committed text.
"""

import textwrap

import cv2
import mediapipe as mp
import numpy as np

from signscribe.session import TranslatorSession, STATUS_ERROR, STATUS_CAMERA_OFF

class HUD:
    def __init__(self):
        self.mp_draw = mp.solutions.drawing_utils
        self.mp_hands = mp.solutions.hands

        # --- THEME COLORS (BGR) ---
        self.C_TEAL   = (200, 255, 0)    # Standard UI
        self.C_RED    = (0, 0, 255)      # Error / Camera off
        self.C_ORANGE = (0, 165, 255)    # Holding
        self.C_GREEN  = (0, 255, 0)      # Dwell complete
        self.C_WHITE  = (235, 235, 235)
        self.C_DARK   = (20, 20, 20)     # Backgrounds

    def _draw_glass_panel(self, img, x, y, w, h, color, alpha=0.6):
        """Draws a semi-transparent 'Glass' background."""
        if y+h > img.shape[0] or x+w > img.shape[1] or x < 0 or y < 0: return

        sub_img = img[y:y+h, x:x+w]
        rect = np.full(sub_img.shape, color, dtype=np.uint8)
        img[y:y+h, x:x+w] = cv2.addWeighted(sub_img, 1 - alpha, rect, alpha, 1.0)
        cv2.rectangle(img, (x, y), (x+w, y+h), color, 1)

    def _bar(self, frame, x, y, w, h, fraction, color):
        self._draw_glass_panel(frame, x, y, w, h, self.C_DARK, 0.8)
        fill_w = int(w * max(0.0, min(fraction, 1.0)))
        cv2.rectangle(frame, (x, y), (x + fill_w, y + h), color, -1)

    def render(self, frame, session: TranslatorSession, landmarks, now: float):
        h, w, _ = frame.shape

        # 1. SYSTEM COLOR
        progress = session.hold_progress(now)
        ui_color = self.C_TEAL
        if session.status in (STATUS_ERROR, STATUS_CAMERA_OFF):
            ui_color = self.C_RED
        elif progress >= 1.0:
            ui_color = self.C_GREEN
        elif progress > 0.0:
            ui_color = self.C_ORANGE

        # 2. SKELETON
        if landmarks is not None:
            self.mp_draw.draw_landmarks(
                frame, landmarks, self.mp_hands.HAND_CONNECTIONS,
                self.mp_draw.DrawingSpec(color=self.C_DARK, thickness=4, circle_radius=2),
                self.mp_draw.DrawingSpec(color=ui_color, thickness=2, circle_radius=2)
            )

        # 3. STATUS BAR
        self._draw_glass_panel(frame, 20, 20, w - 40, 50, self.C_DARK, 0.4)
        cv2.putText(frame, session.status, (35, 52),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, ui_color, 2)

        # 4. DETECTED LABEL + CONFIDENCE / HOLD BARS
        label = session.recognized_label or "-"
        conf = session.last_confidence or 0.0
        cv2.putText(frame, f"Detected: {label}", (35, 100),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, self.C_WHITE, 1)
        cv2.putText(frame, f"Confidence: {conf:.2f}", (35, 125),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, self.C_WHITE, 1)

        self._bar(frame, 35, 135, 200, 8, conf, self.C_TEAL)
        # Threshold marker
        tx = 35 + int(200 * session.config.threshold)
        cv2.line(frame, (tx, 131), (tx, 147), self.C_RED, 2)
        self._bar(frame, 35, 152, 200, 8, progress, ui_color)

        # 5. TEXT PANEL
        panel_h = 110
        self._draw_glass_panel(frame, 20, h - panel_h - 20, w - 40, panel_h, self.C_DARK, 0.6)
        text = session.text or "Start signing - translation will appear here."
        max_chars = max(10, (w - 80) // 14)
        lines = textwrap.wrap(text, max_chars)[-3:] or [""]
        for i, line in enumerate(lines):
            cv2.putText(frame, line, (35, h - panel_h + 12 + i * 30),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, self.C_WHITE, 2)

    def draw_fps(self, frame, fps):
        cv2.putText(frame, f"{int(fps)} FPS", (frame.shape[1]-100, 100),
                    cv2.FONT_HERSHEY_PLAIN, 1.2, self.C_GREEN, 1)
