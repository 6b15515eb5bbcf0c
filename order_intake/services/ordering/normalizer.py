"""Line normalization shared by every extractor."""
from typing import List


def normalize_line(line: str = "") -> str:
    """Drop carriage returns and surrounding whitespace."""
    return line.replace("\r", "").strip()


def split_lines(text: str) -> List[str]:
    """Split a message into normalized lines.

    An empty message yields a single empty line.
    """
    return [normalize_line(line) for line in text.split("\n")]
