"""
Error kinds raised by the parser and the persistence layer
"""
from typing import Optional


class QuizMasterError(Exception):
    """Base class for all application errors"""


class ParseError(QuizMasterError):
    """Bulk question text could not be parsed"""

    def __init__(self, message: str, block_index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.block_index = block_index


class QuizNotFoundError(QuizMasterError):
    """Quiz id is absent from both the remote and the local store"""

    def __init__(self, quiz_id: str):
        super().__init__(f"Quiz not found: {quiz_id}")
        self.quiz_id = quiz_id


class TransientStoreError(QuizMasterError):
    """Any failure talking to the remote store"""


class LocalStoreError(QuizMasterError):
    """Reading or writing the local key-value storage failed"""
