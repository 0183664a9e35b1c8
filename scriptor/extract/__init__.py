"""
scriptor.extract - Audio extraction from video files.

Pipeline Stage 1: Extract a 16kHz mono 16-bit PCM WAV suitable for
whisper.cpp from any container ffmpeg can read.
"""

from __future__ import annotations
