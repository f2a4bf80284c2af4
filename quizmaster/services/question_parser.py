"""
Bulk question parser

Turns pasted free-form text into Question records. Blocks are separated by
blank lines; each block holds a question line followed by four option lines:

    1. What is the capital city of Australia?
    A) Sydney
    B) Melbourne
    C) Canberra *
    D) Perth

The correct option is marked with `*`, `(correct)` or a trailing `✓`.
Unmarked blocks default to the first option.
"""
import logging
import re
import uuid
from typing import Callable, List, Optional

from quizmaster.exceptions import ParseError
from quizmaster.schemas.quiz import Question

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = re.compile(r"\n\s*\n+")
QUESTION_ENUMERATOR = re.compile(r"^\d+[.)]\s*")
OPTION_ENUMERATOR = re.compile(r"^[A-Da-d0-9][.)]\s*")
CORRECT_MARKERS = re.compile(r"\(correct\)|\*|✓")

OPTIONS_PER_QUESTION = 4
MIN_BLOCK_LINES = 1 + OPTIONS_PER_QUESTION


def _default_id(index: int) -> str:
    return str(uuid.uuid4())


def _is_marked_correct(option: str) -> bool:
    return "(correct)" in option or "*" in option or option.endswith("✓")


def parse_questions(
    text: str,
    id_factory: Optional[Callable[[int], str]] = None
) -> List[Question]:
    """
    Parse bulk text into questions

    All or nothing: a single malformed block fails the whole call.

    Args:
        text: Blank-line separated question blocks
        id_factory: Mints a question id from the 0-based block index

    Returns:
        Questions in block order

    Raises:
        ParseError: Empty input, or a block that cannot form a question
    """
    if not text or not text.strip():
        raise ParseError("Please enter some text to parse")

    id_factory = id_factory or _default_id
    blocks = [block for block in BLOCK_SEPARATOR.split(text) if block.strip()]

    questions = [
        _parse_block(block, index, id_factory)
        for index, block in enumerate(blocks)
    ]

    if not questions:
        raise ParseError("No valid questions could be parsed from the text")

    logger.info(f"Parsed {len(questions)} questions from bulk text")
    return questions


def _parse_block(block: str, index: int, id_factory: Callable[[int], str]) -> Question:
    block_number = index + 1
    lines = [line.strip() for line in block.split("\n")]
    lines = [line for line in lines if line]

    if len(lines) < MIN_BLOCK_LINES:
        raise ParseError(
            f"Question block {block_number} does not have enough lines "
            f"for a question and {OPTIONS_PER_QUESTION} options",
            block_index=block_number
        )

    question_text = QUESTION_ENUMERATOR.sub("", lines[0]).strip()
    options = [
        OPTION_ENUMERATOR.sub("", line).strip()
        for line in lines[1:MIN_BLOCK_LINES]
    ]

    correct_answer = 0
    for i, option in enumerate(options):
        if _is_marked_correct(option):
            correct_answer = i
            options[i] = CORRECT_MARKERS.sub("", option).strip()
            break

    if not question_text or any(not option for option in options):
        raise ParseError(
            f"Question block {block_number} has an empty question or option",
            block_index=block_number
        )

    return Question(
        id=id_factory(index),
        text=question_text,
        options=options,
        correct_answer=correct_answer,
    )
