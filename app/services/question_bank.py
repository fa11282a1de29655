"""
Static question banks and question templates per subject.
Banks hold curated questions keyed by canonical topic name; templates are
used to synthesize questions when no canonical topic matches.
"""
from typing import Dict, List
from app.models.schemas import SubjectCategory, QuestionType, Question, QuestionTemplate


# Curated questions: subject -> canonical topic name -> questions (insertion order is match order)
QUESTION_BANKS: Dict[SubjectCategory, Dict[str, List[Question]]] = {
    SubjectCategory.DATABASE: {
        "Database Management Systems": [
            Question(
                question="What is a Database Management System (DBMS)?",
                options=[
                    "A collection of programs that manages database structure and access",
                    "A single program that stores data files",
                    "A hardware component for data storage",
                    "A network protocol for data transfer"
                ],
                correct=0,
                explanation="A DBMS is a collection of programs that enables users to create, maintain, and access databases efficiently."
            ),
            Question(
                question="Which of the following is NOT a function of DBMS?",
                options=[
                    "Data definition and manipulation",
                    "Data security and integrity",
                    "Hardware maintenance",
                    "Concurrent access control"
                ],
                correct=2,
                explanation="DBMS handles software-level database operations, not hardware maintenance."
            ),
        ],
        "SQL": [
            Question(
                question="Which SQL command is used to retrieve data?",
                options=["SELECT", "INSERT", "UPDATE", "DELETE"],
                correct=0,
                explanation="SELECT is used to query and retrieve data from database tables."
            ),
            Question(
                question="What does the WHERE clause do in SQL?",
                options=[
                    "Filters rows based on specified conditions",
                    "Sorts the result set",
                    "Groups rows together",
                    "Joins multiple tables"
                ],
                correct=0,
                explanation="WHERE clause filters rows that meet specific conditions."
            ),
        ],
        "Normalization": [
            Question(
                question="What is the main goal of database normalization?",
                options=[
                    "Eliminate data redundancy and improve data integrity",
                    "Increase database size",
                    "Make queries more complex",
                    "Reduce database performance"
                ],
                correct=0,
                explanation="Normalization reduces redundancy and maintains data consistency."
            ),
        ],
    },
    SubjectCategory.PROGRAMMING: {
        "Variables": [
            Question(
                question="What is a variable in programming?",
                options=[
                    "A named storage location that holds data",
                    "A fixed value that cannot change",
                    "A type of loop structure",
                    "A function parameter"
                ],
                correct=0,
                explanation="Variables are containers that store data values that can be referenced and manipulated."
            ),
        ],
        "Functions": [
            Question(
                question="What is the purpose of functions in programming?",
                options=[
                    "To organize code into reusable blocks",
                    "To slow down program execution",
                    "To increase memory usage",
                    "To make code harder to read"
                ],
                correct=0,
                explanation="Functions help organize code, promote reusability, and improve maintainability."
            ),
        ],
    },
    SubjectCategory.MATHEMATICS: {
        "Algebra": [
            Question(
                question="What is the solution to 2x + 5 = 15?",
                options=["x = 5", "x = 10", "x = 7.5", "x = 20"],
                correct=0,
                explanation="Solving: 2x + 5 = 15, so 2x = 10, therefore x = 5."
            ),
        ],
        "Calculus": [
            Question(
                question="What is the derivative of x²?",
                options=["2x", "x", "x³", "2x²"],
                correct=0,
                explanation="Using the power rule: d/dx(x²) = 2x¹ = 2x."
            ),
        ],
    },
    SubjectCategory.SCIENCE: {
        "Physics": [
            Question(
                question="What is Newton's First Law of Motion?",
                options=[
                    "An object at rest stays at rest unless acted upon by force",
                    "Force equals mass times acceleration",
                    "For every action there is an equal and opposite reaction",
                    "Energy cannot be created or destroyed"
                ],
                correct=0,
                explanation="Newton's First Law states that objects maintain their state of motion unless acted upon by an external force."
            ),
        ],
        "Chemistry": [
            Question(
                question="What is the chemical symbol for water?",
                options=["H₂O", "CO₂", "NaCl", "O₂"],
                correct=0,
                explanation="Water consists of two hydrogen atoms and one oxygen atom: H₂O."
            ),
        ],
    },
    SubjectCategory.DEFAULT: {},
}


# Sentence patterns per subject; subjects without an entry use the default list
QUESTION_TEMPLATES: Dict[SubjectCategory, List[QuestionTemplate]] = {
    SubjectCategory.DEFAULT: [
        QuestionTemplate(template="What is {topic}?", type=QuestionType.DEFINITION),
        QuestionTemplate(template="Which of the following is a key characteristic of {topic}?", type=QuestionType.CHARACTERISTIC),
        QuestionTemplate(template="What is the main purpose of {topic}?", type=QuestionType.PURPOSE),
    ],
    SubjectCategory.DATABASE: [
        QuestionTemplate(template="What does {topic} stand for?", type=QuestionType.ACRONYM),
        QuestionTemplate(template="In {topic}, which statement is correct?", type=QuestionType.CONCEPT),
    ],
    SubjectCategory.PROGRAMMING: [
        QuestionTemplate(template="Which syntax is correct for {topic}?", type=QuestionType.SYNTAX),
    ],
    SubjectCategory.SCIENCE: [
        QuestionTemplate(template="What is the formula for {topic}?", type=QuestionType.FORMULA),
    ],
    SubjectCategory.MATHEMATICS: [],
}


def get_bank(subject: SubjectCategory) -> Dict[str, List[Question]]:
    """Return the canonical-topic bank for a subject (empty if none)."""
    return QUESTION_BANKS.get(subject, {})


def get_templates(subject: SubjectCategory) -> List[QuestionTemplate]:
    """Return the subject's templates, or the default list when it has none."""
    templates = QUESTION_TEMPLATES.get(subject)
    if not templates:
        return QUESTION_TEMPLATES[SubjectCategory.DEFAULT]
    return templates
