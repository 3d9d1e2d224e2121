from __future__ import annotations

import base64
import gc
import hashlib
import io
from typing import Tuple

import cv2
import numpy as np
from PIL import Image

# Card look (dark card, white spotlight, white particles)
BASE_RGB: Tuple[int, int, int] = (31, 41, 55)
GLOW_OPACITY = 0.35
GLOW_RADIUS = 0.75       # fraction of the longer card edge
PARTICLE_GLOW = 0.8
METEOR_TAIL_SEGMENTS = 8


def stable_seed(s: str) -> int:
    return int.from_bytes(hashlib.sha256(s.encode("utf-8")).digest()[:8], "big")


def _spotlight(w: int, h: int, rng: np.random.Generator) -> np.ndarray:
    cx = rng.uniform(0.2, 0.8) * w
    cy = rng.uniform(0.2, 0.8) * h
    yy, xx = np.mgrid[0:h, 0:w].astype(np.float32)
    d = np.sqrt((xx - cx) ** 2 + (yy - cy) ** 2)
    fall = np.clip(1.0 - d / (GLOW_RADIUS * max(w, h)), 0.0, 1.0)
    return (fall ** 2) * GLOW_OPACITY


def _particles(w: int, h: int, n: int, rng: np.random.Generator) -> np.ndarray:
    layer = np.zeros((h, w), np.float32)
    if n <= 0:
        return layer
    xs = rng.integers(0, w, n)
    ys = rng.integers(0, h, n)
    radii = rng.integers(1, 3, n)
    alpha = rng.uniform(0.35, 1.0, n)
    for x, y, r, a in zip(xs, ys, radii, alpha):
        cv2.circle(layer, (int(x), int(y)), int(r), float(a), -1)
    halo = cv2.GaussianBlur(layer, (0, 0), 3)
    return layer + halo * PARTICLE_GLOW


def _meteors(w: int, h: int, n: int, rng: np.random.Generator) -> np.ndarray:
    layer = np.zeros((h, w), np.float32)
    for _ in range(max(0, n)):
        x0 = float(rng.uniform(0, w))
        y0 = float(rng.uniform(0, h * 0.5))
        length = float(rng.uniform(0.08, 0.22)) * w
        # head at (x0, y0), tail up-left, fading out
        step = length / METEOR_TAIL_SEGMENTS
        for i in range(METEOR_TAIL_SEGMENTS):
            a = 1.0 - i / METEOR_TAIL_SEGMENTS
            p1 = (int(x0 - i * step), int(y0 - i * step * 0.5))
            p2 = (int(x0 - (i + 1) * step), int(y0 - (i + 1) * step * 0.5))
            cv2.line(layer, p1, p2, a * 0.9, 1, cv2.LINE_8)
        cv2.circle(layer, (int(x0), int(y0)), 2, 1.0, -1)
    return layer


def render_card_backdrop(
    seed: int,
    width: int = 720,
    height: int = 220,
    *,
    particles: int = 60,
    meteors: int = 6,
) -> bytes:
    """
    Decorative quote-card background as PNG bytes:
    - dark base with a soft white spotlight
    - particle dots with a blurred halo
    - meteor streaks with fading tails
    Same seed + size -> same image.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"card size must be positive, got {width}x{height}")

    rng = np.random.default_rng(seed & 0xFFFFFFFF)

    base = np.empty((height, width, 3), np.float32)
    base[...] = BASE_RGB
    glow = _spotlight(width, height, rng)
    base += (255.0 - base) * glow[..., None]

    light = np.clip(_particles(width, height, particles, rng) + _meteors(width, height, meteors, rng), 0.0, 1.0)
    base += (255.0 - base) * light[..., None]

    pil = Image.fromarray(np.clip(base, 0, 255).astype(np.uint8))
    out = io.BytesIO()
    pil.save(out, format="PNG", optimize=True)

    del base, glow, light, pil
    gc.collect()

    return out.getvalue()


def backdrop_data_uri(png_bytes: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
