"""
Services package.

This package contains the external tool plumbing (yt-dlp, summarizer), the
runner interface over it, and the download orchestration built on top.
"""
