"""
Interview list: filtering, counts and deletion.
"""

import logging
from typing import List

import pandas as pd
import streamlit as st

from db.errors import StorageError
from models.interview import Interview
from services.interview_repository import InterviewRepository
from ui.components import open_repository, render_header

logger = logging.getLogger(__name__)

INTERVIEW_COLUMNS = ["ID", "Candidate", "Interviewer", "Date", "Time", "Post", "Result"]
NO_CANDIDATE = "(deleted candidate)"


def candidate_name(interview: Interview) -> str:
    # Interviews outlive their candidate
    return interview.candidate.fio if interview.candidate is not None else NO_CANDIDATE


def search_interviews(repo: InterviewRepository, fio: str = "", date: str = "", post: str = "") -> List[Interview]:
    """
    Picks the narrowest repository query for the filters that were filled in.
    """
    fio, date, post = fio.strip(), date.strip(), post.strip()
    given = [bool(fio), bool(date), bool(post)]

    if not any(given):
        return repo.get_interviews()
    if given == [True, False, False]:
        return repo.get_interviews_by_candidate_fio(fio)
    if given == [False, True, False]:
        return repo.get_interviews_by_date(date)
    if given == [False, False, True]:
        return repo.get_interviews_by_post(post)
    return repo.get_interviews_by_candidate_fio_and_date_and_post(fio, post, date)


def interviews_frame(interviews: List[Interview]) -> pd.DataFrame:
    rows = [
        {
            "ID": i.id,
            "Candidate": candidate_name(i),
            "Interviewer": i.interviewer.fio,
            "Date": i.date,
            "Time": i.time,
            "Post": i.post,
            "Result": i.result,
        }
        for i in interviews
    ]
    return pd.DataFrame(rows, columns=INTERVIEW_COLUMNS)


def render_interviews():
    """
    Renders the interview list tab.
    """
    render_header("Interviews", "Leave a filter empty to ignore it.")

    col1, col2, col3 = st.columns(3)
    with col1:
        fio = st.text_input("Candidate name contains", key="filter_fio")
    with col2:
        date = st.text_input("Date contains", key="filter_date", placeholder="e.g. 07.2016")
    with col3:
        post = st.text_input("Post contains", key="filter_post")

    try:
        with open_repository() as repo:
            m1, m2 = st.columns(2)
            m1.metric("Interviews", repo.get_count_of_interviews())
            m2.metric("Candidates", repo.get_count_of_candidates())

            interviews = search_interviews(repo, fio, date, post)
            if not interviews:
                st.info("No interviews found.")
                return

            st.dataframe(interviews_frame(interviews), hide_index=True, use_container_width=True)

            st.markdown("---")
            options = {f"#{i.id} {candidate_name(i)} ({i.date})": i.id for i in interviews}
            selected = st.selectbox("Interview", options=list(options), key="interviews_selected")
            interview_id = options[selected]

            col_edit, col_delete = st.columns([1, 1])
            with col_edit:
                if st.button("Open in editor", key="interviews_open"):
                    st.session_state["edit_interview_id"] = interview_id
                    st.success("Switch to the Interview Editor tab to edit it.")
            with col_delete:
                if st.button("Delete interview", key="interviews_delete", type="primary"):
                    repo.del_interview_by_id(interview_id)
                    if st.session_state.get("edit_interview_id") == interview_id:
                        st.session_state.pop("edit_interview_id", None)
                    st.rerun()

    except StorageError as e:
        logger.error(f"Could not load interviews: {e}")
        st.error(f"A database error occurred while loading interviews: {e}")
