"""
Create the remote tables and load the sample quizzes

Usage: python -m quizmaster.seed
"""
import logging

from quizmaster.config import settings
from quizmaster.data.sample_quizzes import SAMPLE_QUIZZES
from quizmaster.database import init_db
from quizmaster.dependencies import get_persistence

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def seed() -> list:
    """Create each sample quiz that is not listed yet, return the new ids"""
    persistence = get_persistence()
    existing = {quiz.title for quiz in persistence.list_quizzes().value}

    created = []
    for quiz in SAMPLE_QUIZZES:
        if quiz.title in existing:
            logger.info(f"Skipping '{quiz.title}', already present")
            continue
        result = persistence.create_quiz(quiz)
        logger.info(f"Seeded '{quiz.title}' as {result.value} ({result.outcome.value})")
        created.append(result.value)
    return created


if __name__ == "__main__":
    try:
        init_db()
    except Exception as e:
        logger.warning(f"Could not create remote tables, seeding the local store: {str(e)}")
    seed()
