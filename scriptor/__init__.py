"""
Scriptor - batch video transcription with ffmpeg and whisper.cpp.

Takes video files and produces plain-text transcripts through a two-stage
pipeline: audio extraction (ffmpeg, 16kHz mono PCM) → transcription
(whisper-cli or a source-built whisper.cpp binary).
"""

__version__ = "0.1.0"
