"""Application configuration constants."""

from __future__ import annotations

APP_NAME = "ClipNote"
APP_VERSION = "0.2.0"
ORG_NAME = "ClipNote"

# Clip sync engine
# Progress reports this soon after a seek may still describe the pre-seek position
SEEK_GRACE_MS = 500
CLIP_END_TOLERANCE_MS = 100  # lead-in before a clip end that counts as "reached"
AUTO_ADVANCE = True
BUFFER_PENDING_SEEK = False  # False = drop commands issued before the media is ready

# Player progress reporting
PROGRESS_INTERVAL_MS = 100

# Transport
SKIP_SECONDS = 5.0

# Supported video formats
VIDEO_EXTENSIONS = [".mp4", ".mkv", ".avi", ".mov", ".webm", ".flv", ".wmv"]
VIDEO_FILTER = "Video Files ({});;All Files (*)".format(
    " ".join(f"*{ext}" for ext in VIDEO_EXTENSIONS)
)

# UI
CLIP_LIST_MIN_WIDTH = 260
NOTES_EDIT_DEBOUNCE_MS = 300
