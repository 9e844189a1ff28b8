import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import qbl_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from qbl_toolkit.core.models import Bank, Choice, Question  # noqa: E402


SAMPLE_BANK_TEXT = """\
% Geography unit
#cap1 What is the capital of France?
[*] Paris
[ ] Lyon
[ ] Marseille
^ geo, europe

#cap2 What is the capital of Japan?
[ ] Osaka
[x] Tokyo
^ geo asia

# Which number is prime?
[ ] 4
[*] 7
[ ] 9
^ maths easy
"""


def build_question(
    qid: str,
    tags: tuple[str, ...] = (),
    stem: str | None = None,
    correct: int = 0,
    n_choices: int = 3,
) -> Question:
    """Helper to create a valid question."""
    return Question(
        id=qid,
        stem=stem if stem is not None else f"Question {qid}?",
        choices=tuple(
            Choice(f"option {i}", i == correct) for i in range(n_choices)
        ),
        tags=frozenset(tags),
        source_file="pool.qbl",
    )


# Common test fixtures
@pytest.fixture
def sample_bank_text() -> str:
    """Three-question bank with a comment, explicit and derived ids."""
    return SAMPLE_BANK_TEXT


@pytest.fixture
def write_bank(tmp_path: Path):
    """Write bank text to a file under tmp_path and return its path."""
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def make_question():
    """The build_question helper, for tests that need custom questions."""
    return build_question


@pytest.fixture
def ten_question_pool() -> list[Question]:
    """10 questions: q1-q3 tagged easy, q4-q5 tagged hard, q6-q10 untagged."""
    pool = []
    for n in range(1, 11):
        if n <= 3:
            tags = ("easy",)
        elif n <= 5:
            tags = ("hard",)
        else:
            tags = ()
        pool.append(build_question(f"q{n}", tags))
    return pool


@pytest.fixture
def validated_bank(ten_question_pool) -> Bank:
    """Validated bank holding the ten-question pool."""
    bank = Bank()
    bank.new_file("pool.qbl")
    bank.extend(ten_question_pool)
    bank.validate()
    return bank
