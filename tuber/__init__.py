"""tuber: fetch video, audio, subtitles or an AI summary for a video URL."""

__version__ = "0.1.0"
