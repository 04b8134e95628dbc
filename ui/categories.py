"""
Evaluation category management.
"""

import logging
import pandas as pd
import streamlit as st

from db.errors import StorageError
from ui.components import open_repository, render_header

logger = logging.getLogger(__name__)


def render_categories():
    render_header("Categories", "Deleting a category also deletes every score given in it.")

    try:
        with open_repository() as repo:
            categories = repo.get_categories()
            st.dataframe(
                pd.DataFrame(
                    [{"ID": c.id, "Name": c.name} for c in categories], columns=["ID", "Name"]
                ),
                hide_index=True,
            )

            with st.form(key="category_add", clear_on_submit=True):
                name = st.text_input("New category")
                if st.form_submit_button("Add") and name.strip():
                    if repo.get_category_by_name(name.strip()) is not None:
                        st.warning(f"Category '{name.strip()}' already exists.")
                    else:
                        repo.add_category(name.strip())
                        st.rerun()

            if not categories:
                return

            st.markdown("---")
            options = {f"#{c.id} {c.name}": c.id for c in categories}
            selected = st.selectbox("Category", options=list(options), key="category_selected")
            category_id = options[selected]

            col1, col2 = st.columns([3, 1])
            with col1:
                new_name = st.text_input("Rename to", key=f"category_rename_{category_id}")
                if st.button("Rename", key="category_rename") and new_name.strip():
                    repo.edit_category(category_id, new_name.strip())
                    st.rerun()
            with col2:
                if st.button("Delete", key="category_delete", type="primary"):
                    repo.del_category_by_id(category_id)
                    st.rerun()

    except StorageError as e:
        logger.error(f"Category operation failed: {e}")
        st.error(f"A database error occurred: {e}")
