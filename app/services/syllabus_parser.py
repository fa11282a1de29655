"""
Syllabus parser.
Turns raw multi-line syllabus text into an ordered list of TopicRecords.

Line rules (checked in this order):
- Header: "1. ..." numbering, an all-caps line, or a capitalised line of
  letters and spaces with an optional trailing colon. Opens a new topic.
- Subtopic: a "-" or "•" bullet, or a line indented by two or more spaces.
  Attached to the open topic; also split on "," / ";" into keywords.
- Anything else opens a topic verbatim, but only when no topic is open.
"""
import re
from typing import List, Optional, Dict, Any
from app.core.logging_config import logger
from app.models.schemas import TopicRecord


NUMBERED_HEADER = re.compile(r'^\d+\.')
ALL_CAPS_HEADER = re.compile(r'^[A-Z][^a-z]*$')
TITLE_HEADER = re.compile(r'^[A-Z][a-zA-Z\s]+:?$')

BULLET_LINE = re.compile(r'^\s*[-•]')
INDENTED_LINE = re.compile(r'^\s{2,}')

NUMBER_PREFIX = re.compile(r'^\d+\.\s*')
TRAILING_COLON = re.compile(r':$')
BULLET_PREFIX = re.compile(r'^\s*[-•]\s*')
KEYWORD_SEPARATOR = re.compile(r'[,;]')

BYTE_ORDER_MARK = '\ufeff'


def is_topic_header(line: str) -> bool:
    """Check whether a trimmed line opens a new topic."""
    return bool(
        NUMBERED_HEADER.match(line)
        or ALL_CAPS_HEADER.match(line)
        or TITLE_HEADER.match(line)
    )


def is_subtopic(raw_line: str, trimmed_line: str) -> bool:
    """Check whether a line is a bullet or an indented child line."""
    return bool(BULLET_LINE.match(trimmed_line) or INDENTED_LINE.match(raw_line))


def clean_topic_name(line: str) -> str:
    """Strip a leading "N." enumeration and one trailing colon."""
    return TRAILING_COLON.sub('', NUMBER_PREFIX.sub('', line))


def extract_keywords(subtopic: str) -> List[str]:
    """Split a subtopic on commas and semicolons, dropping empty pieces."""
    pieces = (piece.strip() for piece in KEYWORD_SEPARATOR.split(subtopic))
    return [piece for piece in pieces if piece]


def parse_syllabus(syllabus_text: str) -> List[TopicRecord]:
    """
    Parse syllabus text into topic records.

    Args:
        syllabus_text: Raw pasted syllabus

    Returns:
        TopicRecords in parse order, indexed 0..N-1 (empty for blank input)
    """
    if not syllabus_text or not syllabus_text.strip():
        logger.info("[Parser] Empty syllabus, no topics")
        return []

    logger.info(f"[Parser] Parsing syllabus ({len(syllabus_text)} chars)")

    topics: List[TopicRecord] = []
    current: Optional[Dict[str, Any]] = None

    def close_current():
        if current is not None:
            topics.append(TopicRecord(**current))

    for raw_line in syllabus_text.split('\n'):
        # A byte-order mark counts as whitespace
        raw_line = raw_line.replace(BYTE_ORDER_MARK, '')
        line = raw_line.strip()
        if not line:
            continue

        if is_topic_header(line):
            close_current()
            current = {
                "index": len(topics),
                "name": clean_topic_name(line),
                "subtopics": [],
                "keywords": [],
            }
        elif is_subtopic(raw_line, line):
            if current is None:
                logger.debug(f"[Parser] Dropping subtopic with no open topic: {line[:50]}")
                continue
            subtopic = BULLET_PREFIX.sub('', line)
            current["subtopics"].append(subtopic)
            current["keywords"].extend(extract_keywords(subtopic))
        elif current is None:
            current = {
                "index": len(topics),
                "name": line,
                "subtopics": [],
                "keywords": [],
            }

    close_current()

    logger.info(f"[Parser] Parsed {len(topics)} topics: {[topic.name for topic in topics]}")
    return topics
