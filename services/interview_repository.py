"""
Interview repository: the single point of access to the interview-tracking
tables (candidates, interviewers, categories, interviews, marks and
interview comments).

Every public method is one unit of work. It commits once when it finishes,
rolls back everything it wrote if it fails, and turns any SQLAlchemy failure
into a StorageError. Methods that call other public methods join the
caller's transaction instead of committing on their own.
"""

import functools
import logging
import operator
from typing import Callable, List, Optional, Sequence

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.errors import StorageError
from db.session import DATABASE_URL, init_db, make_engine, make_session_factory
from models.candidate import Candidate
from models.category import Category
from models.category_row import CategoryRow
from models.interview import Interview
from models.interview_comment import InterviewComment
from models.interviewer import Interviewer
from models.mark import Mark

logger = logging.getLogger(__name__)

PLACEHOLDER_FIO = "empty"
PLACEHOLDER_BORN_DATE = "01.01.2013"
DEFAULT_BORN_DATE = "01.02.1975"
NO_BAN = "-"

# (stored name, wanted name) -> match?
NameMatcher = Callable[[str, str], bool]
exact_match: NameMatcher = operator.eq


def unit_of_work(method):
    """
    Run a repository method inside one transaction.

    Only the outermost call commits or rolls back; nested calls run inside
    the caller's transaction.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self._depth:
            return method(self, *args, **kwargs)

        self._depth += 1
        try:
            result = method(self, *args, **kwargs)
            self.db.commit()
            return result
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Storage failure in %s", method.__name__)
            reason = getattr(e, "orig", None) or e
            raise StorageError(str(reason), operation=method.__name__) from e
        except Exception:
            self.db.rollback()
            raise
        finally:
            self._depth -= 1

    return wrapper


def _contains(column, value: str):
    # LIKE '%value%', with % and _ in the value matched literally
    return column.contains(value, autoescape=True)


class InterviewRepository:
    """Repository for every interview-tracking entity"""

    def __init__(self, db: Session, engine: Optional[Engine] = None):
        """
        Args:
            db: SQLAlchemy session, held for the lifetime of the repository
            engine: engine to dispose of on close(), when the repository owns it
        """
        self.db = db
        self._engine = engine
        self._depth = 0

    @classmethod
    def from_url(cls, database_url: str = DATABASE_URL) -> "InterviewRepository":
        """
        Open a repository on its own engine, creating missing tables first.
        """
        bind = make_engine(database_url)
        try:
            init_db(bind)
        except SQLAlchemyError as e:
            bind.dispose()
            logger.exception("Could not initialise database at %s", database_url)
            raise StorageError(str(e), operation="from_url") from e
        return cls(make_session_factory(bind)(), engine=bind)

    def close(self) -> None:
        self.db.close()
        if self._engine is not None:
            self._engine.dispose()

    # --- Filtered reads ---

    @unit_of_work
    def get_interviews_by_candidate_fio(self, fio: str) -> List[Interview]:
        """
        Interviews whose candidate's full name contains `fio`.
        % and _ in `fio` are matched literally, not as wildcards.
        """
        return (
            self.db.query(Interview)
            .join(Interview.candidate)
            .filter(_contains(Candidate.fio, fio))
            .order_by(Interview.id)
            .all()
        )

    @unit_of_work
    def get_interviews_by_date(self, date: str) -> List[Interview]:
        """
        Interviews whose date contains `date`, e.g. "07.2016" for a whole month.
        % and _ are matched literally.
        """
        return (
            self.db.query(Interview)
            .filter(_contains(Interview.date, date))
            .order_by(Interview.id)
            .all()
        )

    @unit_of_work
    def get_interviews_by_post(self, post: str) -> List[Interview]:
        """Interviews whose post contains `post` (% and _ matched literally)."""
        return (
            self.db.query(Interview)
            .filter(_contains(Interview.post, post))
            .order_by(Interview.id)
            .all()
        )

    @unit_of_work
    def get_interviews_by_candidate_fio_and_date_and_post(
        self, fio: str, post: str, date: str
    ) -> List[Interview]:
        """
        Interviews matching all three substrings at once. The substrings are
        matched literally: % and _ are not wildcards.

        :param fio: part of the candidate's full name
        :param post: part of the post applied for
        :param date: part of the interview date
        """
        return (
            self.db.query(Interview)
            .join(Interview.candidate)
            .filter(
                _contains(Candidate.fio, fio),
                _contains(Interview.date, date),
                _contains(Interview.post, post),
            )
            .order_by(Interview.id)
            .all()
        )

    @unit_of_work
    def get_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.id).all()

    @unit_of_work
    def get_candidates(self) -> List[Candidate]:
        return self.db.query(Candidate).order_by(Candidate.id).all()

    @unit_of_work
    def get_interviewers(self) -> List[Interviewer]:
        return self.db.query(Interviewer).order_by(Interviewer.id).all()

    @unit_of_work
    def get_interviews(self) -> List[Interview]:
        return self.db.query(Interview).order_by(Interview.id).all()

    @unit_of_work
    def get_count_of_interviews(self) -> int:
        return self.db.query(Interview).count()

    @unit_of_work
    def get_count_of_candidates(self) -> int:
        return self.db.query(Candidate).count()

    # --- Point reads ---

    @unit_of_work
    def get_interview_by_id(self, interview_id: Optional[int]) -> Optional[Interview]:
        return self.db.query(Interview).filter(Interview.id == interview_id).first()

    @unit_of_work
    def get_category_by_id(self, category_id: Optional[int]) -> Optional[Category]:
        return self.db.query(Category).filter(Category.id == category_id).first()

    @unit_of_work
    def find_candidate_by_id(self, candidate_id: Optional[int]) -> Optional[Candidate]:
        return self.db.query(Candidate).filter(Candidate.id == candidate_id).first()

    @unit_of_work
    def find_interviewer_by_id(self, interviewer_id: Optional[int]) -> Optional[Interviewer]:
        return self.db.query(Interviewer).filter(Interviewer.id == interviewer_id).first()

    @unit_of_work
    def get_candidate_by_id(self, candidate_id: Optional[int]) -> Candidate:
        """
        Candidate by id, or a newly created "empty" placeholder when the id is unknown.
        Use find_candidate_by_id() to tell a miss apart.
        """
        candidate = self.find_candidate_by_id(candidate_id)
        if candidate is None:
            logger.info("Candidate %s not found, creating placeholder", candidate_id)
            candidate = self.add_candidate(PLACEHOLDER_FIO, PLACEHOLDER_BORN_DATE, NO_BAN)
        return candidate

    @unit_of_work
    def get_interviewer_by_id(self, interviewer_id: Optional[int]) -> Interviewer:
        """
        Interviewer by id, or a newly created "empty" placeholder when the id is unknown.
        """
        interviewer = self.find_interviewer_by_id(interviewer_id)
        if interviewer is None:
            logger.info("Interviewer %s not found, creating placeholder", interviewer_id)
            interviewer = self.add_interviewer(PLACEHOLDER_FIO)
        return interviewer

    @unit_of_work
    def get_candidates_by_fio(
        self, fio: str, matcher: NameMatcher = exact_match
    ) -> List[Candidate]:
        """All candidates whose name satisfies matcher(stored_fio, fio), lowest id first."""
        return [c for c in self.get_candidates() if matcher(c.fio, fio)]

    @unit_of_work
    def get_interviewers_by_fio(
        self, fio: str, matcher: NameMatcher = exact_match
    ) -> List[Interviewer]:
        return [i for i in self.get_interviewers() if matcher(i.fio, fio)]

    @unit_of_work
    def resolve_candidate(
        self,
        fio: str,
        matcher: NameMatcher = exact_match,
        born_date: str = DEFAULT_BORN_DATE,
        banned: str = NO_BAN,
    ) -> Candidate:
        """
        First candidate matching `fio` under `matcher`, or a new one.

        Names are not unique, so with duplicates the lowest id wins.
        `born_date` and `banned` are only used when a candidate is created.
        """
        matches = self.get_candidates_by_fio(fio, matcher)
        if matches:
            return matches[0]
        logger.info("No candidate named %r, creating one", fio)
        return self.add_candidate(fio, born_date, banned)

    @unit_of_work
    def resolve_interviewer(self, fio: str, matcher: NameMatcher = exact_match) -> Interviewer:
        matches = self.get_interviewers_by_fio(fio, matcher)
        if matches:
            return matches[0]
        logger.info("No interviewer named %r, creating one", fio)
        return self.add_interviewer(fio)

    @unit_of_work
    def get_candidate_by_fio(self, fio: str) -> Candidate:
        return self.resolve_candidate(fio)

    @unit_of_work
    def get_interviewer_by_fio(self, fio: str) -> Interviewer:
        return self.resolve_interviewer(fio)

    @unit_of_work
    def get_category_by_name(self, name: str) -> Optional[Category]:
        # No auto-create, unlike candidates and interviewers
        for category in self.get_categories():
            if category.name == name:
                return category
        return None

    @unit_of_work
    def get_interview_comment_by_interview_id(self, interview_id: int) -> Optional[InterviewComment]:
        return (
            self.db.query(InterviewComment)
            .filter(InterviewComment.interview_id == interview_id)
            .first()
        )

    @unit_of_work
    def get_interview_marks(self, interview_id: int) -> List[Mark]:
        return (
            self.db.query(Mark)
            .filter(Mark.interview_id == interview_id)
            .order_by(Mark.id)
            .all()
        )

    @unit_of_work
    def get_mark_by_interview_and_category(self, interview_id: int, category_name: str) -> Optional[Mark]:
        for mark in self.get_interview_marks(interview_id):
            if mark.category.name == category_name:
                return mark
        return None

    @unit_of_work
    def get_interview_marks_all(self, interview_id: int) -> List[CategoryRow]:
        """
        The full score sheet of an interview: one row per known category,
        0.0 where the interview has no mark for it.
        """
        values = {mark.category_id: mark.value for mark in self.get_interview_marks(interview_id)}
        return [
            CategoryRow(category, values.get(category.id, 0.0))
            for category in self.get_categories()
        ]

    # --- Writes ---

    @unit_of_work
    def add_interview(
        self,
        fio: str,
        born_date: str,
        interviewer_fio: str,
        interview_date: str,
        result: str,
        post: str,
        time: str,
    ) -> Interview:
        """
        Create an interview, finding or creating its candidate and interviewer by name.
        The candidate's birth date is overwritten with `born_date` even if it already existed.
        """
        candidate = self.get_candidate_by_fio(fio)
        candidate.born_date = born_date

        interview = Interview(
            candidate=candidate,
            interviewer=self.get_interviewer_by_fio(interviewer_fio),
            date=interview_date,
            result=result,
            post=post,
            time=time,
        )
        self.db.add(interview)
        self.db.flush()
        logger.info("Created interview %s for candidate %s", interview.id, candidate.id)
        return interview

    @unit_of_work
    def add_interviewer(self, fio: str) -> Interviewer:
        interviewer = Interviewer(fio=fio)
        self.db.add(interviewer)
        self.db.flush()
        return interviewer

    @unit_of_work
    def add_category(self, name: str) -> Category:
        category = Category(name=name)
        self.db.add(category)
        self.db.flush()
        return category

    @unit_of_work
    def add_candidate(self, fio: str, born_date: str, banned: str) -> Candidate:
        candidate = Candidate(fio=fio, born_date=born_date, banned=banned)
        self.db.add(candidate)
        self.db.flush()
        return candidate

    @unit_of_work
    def add_mark(self, category_id: int, interview_id: int, value: float) -> Mark:
        """
        Score an existing interview in an existing category.
        An unknown id, or a second mark for the same pair, raises StorageError.
        """
        mark = Mark(
            category=self.get_category_by_id(category_id),
            interview=self.get_interview_by_id(interview_id),
            value=value,
        )
        self.db.add(mark)
        self.db.flush()
        return mark

    @unit_of_work
    def add_or_edit_interview_comment(
        self,
        interview_id: int,
        experience: str,
        recommendations: str,
        last_work: str,
        comment: str,
    ) -> InterviewComment:
        interview_comment = self.get_interview_comment_by_interview_id(interview_id)
        if interview_comment is None:
            interview_comment = InterviewComment(interview=self.get_interview_by_id(interview_id))
            self.db.add(interview_comment)
        interview_comment.experience = experience
        interview_comment.recommendations = recommendations
        interview_comment.last_work = last_work
        interview_comment.comment = comment
        self.db.flush()
        return interview_comment

    @unit_of_work
    def add_interview_marks(self, interview_id: int, marks: Sequence[CategoryRow]) -> List[Mark]:
        """Insert a mark for every scored row; rows at 0.0 are skipped."""
        return [
            self.add_mark(row.category.id, interview_id, row.value)
            for row in marks
            if row.is_scored()
        ]

    @unit_of_work
    def add_interview_with_marks(
        self,
        fio: str,
        born_date: str,
        interviewer_fio: str,
        interview_date: str,
        result: str,
        post: str,
        time: str,
        marks: Sequence[CategoryRow],
    ) -> Interview:
        """
        add_interview() followed by add_interview_marks(), in one transaction:
        if a mark cannot be stored, the interview is not kept either.
        """
        interview = self.add_interview(fio, born_date, interviewer_fio, interview_date, result, post, time)
        self.add_interview_marks(interview.id, marks)
        return interview

    @unit_of_work
    def edit_interview_marks(self, interview_id: int, marks: Sequence[CategoryRow]) -> List[Mark]:
        """Upsert a mark for every scored row; rows at 0.0 are skipped."""
        return [
            self.edit_mark(interview_id, row.category.id, row.value)
            for row in marks
            if row.is_scored()
        ]

    @unit_of_work
    def edit_mark(self, interview_id: int, category_id: int, value: float) -> Mark:
        mark = (
            self.db.query(Mark)
            .filter(Mark.interview_id == interview_id, Mark.category_id == category_id)
            .first()
        )
        if mark is None:
            return self.add_mark(category_id, interview_id, value)
        mark.value = value
        self.db.flush()
        return mark

    @unit_of_work
    def edit_category(self, category_id: int, name: str) -> Optional[Category]:
        category = self.get_category_by_id(category_id)
        if category is None:
            return None
        category.name = name
        self.db.flush()
        return category

    @unit_of_work
    def edit_candidate(
        self, candidate_id: int, fio: str, born_date: str, banned: str
    ) -> Optional[Candidate]:
        candidate = self.find_candidate_by_id(candidate_id)
        if candidate is None:
            return None
        candidate.fio = fio
        candidate.born_date = born_date
        candidate.banned = banned
        self.db.flush()
        return candidate

    @unit_of_work
    def edit_candidate_by_fio(self, fio: str, born_date: str, banned: str) -> Candidate:
        """
        Overwrite the first candidate named exactly `fio`, creating one if none is.
        The name is the lookup key, so this cannot rename; use edit_candidate() for that.
        """
        candidate = self.resolve_candidate(fio)
        candidate.fio = fio
        candidate.born_date = born_date
        candidate.banned = banned
        self.db.flush()
        return candidate

    @unit_of_work
    def edit_or_add_interview(
        self,
        interview_id: Optional[int],
        interview_date: str,
        candidate_id: Optional[int],
        candidate_fio: str,
        born_date: str,
        interviewer_id: Optional[int],
        interviewer_fio: str,
        result: str,
        post: str,
        time: str,
        marks: Sequence[CategoryRow],
    ) -> Interview:
        """
        Save an interview together with its candidate, interviewer and score sheet.

        Unknown candidate or interviewer ids get placeholder rows that are then
        filled in. A changed interviewer name selects a new interviewer row
        rather than renaming the existing one. An unknown interview id creates
        a new interview. Everything is written in one transaction.
        """
        candidate = self.get_candidate_by_id(candidate_id)
        candidate.fio = candidate_fio
        candidate.born_date = born_date

        interviewer = self.get_interviewer_by_id(interviewer_id)
        if interviewer.fio != interviewer_fio:
            interviewer = self.add_interviewer(interviewer_fio)

        interview = self.get_interview_by_id(interview_id)
        if interview is None:
            interview = Interview()
            self.db.add(interview)
        interview.date = interview_date
        interview.interviewer = interviewer
        interview.candidate = candidate
        interview.result = result
        interview.post = post
        interview.time = time
        self.db.flush()

        self.edit_interview_marks(interview.id, marks)
        return interview

    # --- Deletes ---

    @unit_of_work
    def del_category_by_id(self, category_id: int) -> bool:
        """Delete a category and, through the foreign key, every mark given in it."""
        category = self.get_category_by_id(category_id)
        if category is None:
            return False
        self.db.delete(category)
        self.db.flush()
        logger.info("Deleted category %s", category_id)
        return True

    @unit_of_work
    def del_interview_by_id(self, interview_id: int) -> bool:
        """Delete an interview together with its marks and comment."""
        interview = self.get_interview_by_id(interview_id)
        if interview is None:
            return False
        self.db.delete(interview)
        self.db.flush()
        logger.info("Deleted interview %s", interview_id)
        return True

    @unit_of_work
    def del_candidate_by_id(self, candidate_id: int) -> bool:
        """
        Delete the candidate row only. Their interviews, marks and comments
        stay; each interview is left with no candidate (candidate_id NULL).
        """
        candidate = self.find_candidate_by_id(candidate_id)
        if candidate is None:
            return False
        self.db.delete(candidate)
        self.db.flush()
        logger.info("Deleted candidate %s", candidate_id)
        return True
