"""
Interview editor: interview details, score sheet and comment.
"""

import logging
from typing import List, Optional

import pandas as pd
import streamlit as st

from db.errors import StorageError
from models.category_row import CategoryRow
from models.interview import Interview
from ui.components import create_searchbox, open_repository, render_header
from ui.interviews import candidate_name

logger = logging.getLogger(__name__)

NEW_INTERVIEW = "New interview"


def sheet_frame(rows: List[CategoryRow]) -> pd.DataFrame:
    return pd.DataFrame(
        {"Category": [row.name for row in rows], "Score": [float(row.value) for row in rows]}
    )


def rows_from_frame(rows: List[CategoryRow], frame: pd.DataFrame) -> List[CategoryRow]:
    """
    Applies the edited scores back onto the sheet rows (the editor keeps row order).
    Empty cells count as 0.0, i.e. no score.
    """
    scores = frame["Score"].fillna(0.0).tolist()
    return [CategoryRow(row.category, float(score)) for row, score in zip(rows, scores)]


def save_interview(
    repo,
    interview: Optional[Interview],
    candidate_fio: str,
    born_date: str,
    interviewer_fio: str,
    date: str,
    result: str,
    post: str,
    time: str,
    marks: List[CategoryRow],
) -> Interview:
    """
    Writes the editor form back in a single transaction: a new interview with
    its scores, or the edited interview with its score sheet upserted.
    """
    if interview is None:
        return repo.add_interview_with_marks(
            candidate_fio, born_date, interviewer_fio, date, result, post, time, marks
        )
    return repo.edit_or_add_interview(
        interview.id,
        date,
        interview.candidate_id,
        candidate_fio,
        born_date,
        interview.interviewer_id,
        interviewer_fio,
        result,
        post,
        time,
        marks,
    )


def render_interview_editor():
    """
    Renders the create/edit interview tab.
    """
    render_header("Interview Editor")

    try:
        with open_repository() as repo:
            interviews = repo.get_interviews()
            options = {NEW_INTERVIEW: None}
            options.update({f"#{i.id} {candidate_name(i)} ({i.date})": i.id for i in interviews})
            labels = list(options)

            preselected = st.session_state.get("edit_interview_id")
            index = next((n for n, label in enumerate(labels) if options[label] == preselected), 0)
            selected = st.selectbox("Interview", options=labels, index=index, key="editor_selected")
            interview_id: Optional[int] = options[selected]
            interview = repo.get_interview_by_id(interview_id) if interview_id else None

            if interview is None:
                known = create_searchbox(
                    label="Existing candidate",
                    placeholder="Type a candidate's name...",
                    key="editor_candidate_search",
                    data=repo.get_candidates(),
                    display_fn=lambda c: f"{c.fio} (#{c.id})",
                    return_fn=lambda c: c.fio,
                )
                default_fio = known or ""
            else:
                default_fio = interview.candidate.fio if interview.candidate else ""
            born_default = interview.candidate.born_date if interview and interview.candidate else ""

            key = f"editor_{interview_id or 'new'}"
            col1, col2 = st.columns(2)
            with col1:
                candidate_fio = st.text_input("Candidate name", value=default_fio, key=f"{key}_fio")
                born_date = st.text_input("Birth date", value=born_default, key=f"{key}_born")
                interviewer_fio = st.text_input(
                    "Interviewer", value=interview.interviewer.fio if interview else "", key=f"{key}_interviewer"
                )
            with col2:
                date = st.text_input("Date", value=interview.date if interview else "", key=f"{key}_date")
                time = st.text_input("Time", value=interview.time if interview else "", key=f"{key}_time")
                post = st.text_input("Post", value=interview.post if interview else "", key=f"{key}_post")
                result = st.text_input("Result", value=interview.result if interview else "", key=f"{key}_result")

            st.markdown("**Scores** (0 means not scored)")
            sheet = repo.get_interview_marks_all(interview.id) if interview else [
                CategoryRow(category) for category in repo.get_categories()
            ]
            edited = st.data_editor(
                sheet_frame(sheet),
                disabled=["Category"],
                hide_index=True,
                key=f"{key}_sheet",
            )

            if st.button("Save interview", type="primary", key=f"{key}_save"):
                if not candidate_fio.strip() or not interviewer_fio.strip():
                    st.warning("Candidate and interviewer names are required.")
                    return
                marks = rows_from_frame(sheet, edited)
                saved = save_interview(
                    repo, interview, candidate_fio, born_date, interviewer_fio, date, result, post, time, marks
                )
                st.session_state["edit_interview_id"] = saved.id
                st.success(f"Interview #{saved.id} saved.")

            if interview is not None:
                render_comment(repo, interview.id)

    except StorageError as e:
        logger.error(f"Could not save interview: {e}")
        st.error(f"A database error occurred: {e}")


def render_comment(repo, interview_id: int):
    st.markdown("---")
    st.markdown("**Interviewer's comment**")
    current = repo.get_interview_comment_by_interview_id(interview_id)

    with st.form(key=f"comment_{interview_id}"):
        experience = st.text_area("Experience", value=current.experience if current else "")
        recommendations = st.text_area("Recommendations", value=current.recommendations if current else "")
        last_work = st.text_input("Last workplace", value=current.last_work if current else "")
        comment = st.text_area("Comment", value=current.comment if current else "")
        if st.form_submit_button("Save comment"):
            repo.add_or_edit_interview_comment(interview_id, experience, recommendations, last_work, comment)
            st.success("Comment saved.")
