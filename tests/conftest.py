"""
Test configuration and fixtures
"""
import pytest

from services.interview_repository import InterviewRepository


@pytest.fixture
def database_url(tmp_path) -> str:
    """A fresh SQLite database file per test"""
    return f"sqlite:///{tmp_path / 'interviews.db'}"


@pytest.fixture
def repo(database_url):
    """Repository on an empty database"""
    repository = InterviewRepository.from_url(database_url)
    yield repository
    repository.close()


@pytest.fixture
def communication(repo):
    return repo.add_category("Communication")


@pytest.fixture
def ivanov_interview(repo, communication):
    """Ivanov interviewed by Petrov for an Engineer post"""
    repo.add_candidate("Ivanov", "1990-01-01", "")
    repo.add_interviewer("Petrov")
    return repo.add_interview(
        "Ivanov", "1990-01-01", "Petrov", "2016-07-07", "Hired", "Engineer", "10:00"
    )
