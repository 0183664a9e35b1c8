"""
scriptor.transcribe - whisper.cpp transcription.

Pipeline Stage 2: Transcribe a 16kHz WAV with whisper-cli (or a
source-built whisper.cpp binary) into a plain-text transcript.
"""

from __future__ import annotations
