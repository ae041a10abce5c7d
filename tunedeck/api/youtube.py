"""
YouTube helpers - Video identifier extraction.
"""
import re
from typing import Optional

VIDEO_ID_LENGTH = 11

# short link, /v/, /u/x/, embed, watch?v= and &v= forms; the id stops at # & ?
_VIDEO_ID_RE = re.compile(r'^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*')


def extract_video_id(url) -> Optional[str]:
    """Return the 11-character video id carried by url, or None."""
    if not isinstance(url, str):
        return None
    match = _VIDEO_ID_RE.match(url)
    if not match:
        return None
    video_id = match.group(2)
    return video_id if len(video_id) == VIDEO_ID_LENGTH else None


def placeholder_title(video_id: str) -> str:
    """Display title used in place of a real lookup."""
    return f'YouTube ({video_id[:6]}...)'
