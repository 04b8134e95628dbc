"""
Candidate management: list, add, edit and delete.
"""

import logging
import pandas as pd
import streamlit as st

from db.errors import StorageError
from ui.components import open_repository, render_header

logger = logging.getLogger(__name__)


def render_candidates():
    render_header("Candidates")

    try:
        with open_repository() as repo:
            candidates = repo.get_candidates()
            st.dataframe(
                pd.DataFrame(
                    [
                        {"ID": c.id, "Name": c.fio, "Birth date": c.born_date, "Banned": c.banned}
                        for c in candidates
                    ],
                    columns=["ID", "Name", "Birth date", "Banned"],
                ),
                hide_index=True,
                use_container_width=True,
            )

            with st.expander("Add candidate"):
                with st.form(key="candidate_add", clear_on_submit=True):
                    fio = st.text_input("Full name")
                    born_date = st.text_input("Birth date")
                    banned = st.text_input("Ban note")
                    if st.form_submit_button("Add") and fio.strip():
                        repo.add_candidate(fio.strip(), born_date, banned)
                        st.rerun()

            if not candidates:
                return

            st.markdown("---")
            by_id = {c.id: c for c in candidates}
            candidate_id = st.selectbox(
                "Candidate",
                options=list(by_id),
                format_func=lambda cid: f"#{cid} {by_id[cid].fio}",
                key="candidate_selected",
            )
            candidate = by_id[candidate_id]

            with st.form(key=f"candidate_edit_{candidate_id}"):
                fio = st.text_input("Full name", value=candidate.fio)
                born_date = st.text_input("Birth date", value=candidate.born_date or "")
                banned = st.text_input("Ban note", value=candidate.banned or "")
                if st.form_submit_button("Save"):
                    repo.edit_candidate(candidate_id, fio, born_date, banned)
                    st.rerun()

            st.caption("Deleting a candidate keeps their interviews, listed with no candidate.")
            if st.button("Delete candidate", key="candidate_delete", type="primary"):
                repo.del_candidate_by_id(candidate_id)
                st.rerun()

    except StorageError as e:
        logger.error(f"Candidate operation failed: {e}")
        st.error(f"A database error occurred: {e}")
