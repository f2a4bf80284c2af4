"""
Sample quizzes loaded by the seed command
"""
from quizmaster.schemas.quiz import QuizCreate


def _question(qid, text, options, correct_answer):
    return {"id": qid, "text": text, "options": options, "correct_answer": correct_answer}


SAMPLE_QUIZZES = [
    QuizCreate(
        title="General Knowledge Quiz",
        description="Test your general knowledge with these trivia questions.",
        category="General Knowledge",
        time_limit=10,
        questions=[
            _question("q1", "What is the capital city of Australia?", ["Sydney", "Melbourne", "Canberra", "Perth"], 2),
            _question("q2", "Which planet is known as the Red Planet?", ["Venus", "Mars", "Jupiter", "Saturn"], 1),
            _question("q3", "Who painted the Mona Lisa?", ["Vincent van Gogh", "Pablo Picasso", "Leonardo da Vinci", "Michelangelo"], 2),
            _question("q4", "What is the largest ocean on Earth?", ["Atlantic Ocean", "Indian Ocean", "Arctic Ocean", "Pacific Ocean"], 3),
            _question("q5", "Which country is known as the Land of the Rising Sun?", ["China", "Thailand", "Japan", "South Korea"], 2),
        ],
    ),
    QuizCreate(
        title="Science Quiz",
        description="Test your knowledge of basic science concepts.",
        category="Science",
        time_limit=8,
        questions=[
            _question("q1", "What is the chemical symbol for gold?", ["Go", "Ag", "Au", "Gd"], 2),
            _question("q2", "What is the smallest unit of life?", ["Atom", "Cell", "Molecule", "Organ"], 1),
            _question("q3", "What force pulls objects toward Earth?", ["Magnetism", "Friction", "Gravity", "Tension"], 2),
            _question("q4", "What process do plants use to make their own food?", ["Photosynthesis", "Respiration", "Digestion", "Transpiration"], 0),
            _question("q5", "What is the largest organ in the human body?", ["Heart", "Brain", "Liver", "Skin"], 3),
        ],
    ),
    QuizCreate(
        title="History Quiz",
        description="Test your knowledge of world history events.",
        category="History",
        time_limit=10,
        questions=[
            _question("q1", "In which year did World War II end?", ["1943", "1945", "1947", "1950"], 1),
            _question("q2", "Who was the first President of the United States?", ["Thomas Jefferson", "Abraham Lincoln", "George Washington", "John Adams"], 2),
            _question("q3", "The Great Wall of China was built primarily to defend against which group?", ["Mongols", "Japanese", "Russians", "Vietnamese"], 0),
            _question("q4", "Which empire was ruled by Caesar Augustus?", ["Greek", "Persian", "Roman", "Ottoman"], 2),
            _question("q5", "The Renaissance period began in which country?", ["France", "Germany", "Italy", "England"], 2),
        ],
    ),
]
