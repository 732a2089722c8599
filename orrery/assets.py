#!/usr/bin/env python3
"""
Texture resolution by body name.

Only the naming convention lives here; decoding the image is the renderer's
job and a missing file is its problem to report.
"""
import os

TEXTURES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "textures")


def texture_path(name: str, textures_dir: str = TEXTURES_DIR) -> str:
    return os.path.join(textures_dir, f"{name.lower()}.jpg")
