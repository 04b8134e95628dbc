"""
Main Streamlit entry point for the interview tracker.
Each tab is rendered by a page module under ui/; all of them talk to the
database through the interview repository.
"""

import logging
import os
import streamlit as st
from dotenv import load_dotenv
from db.session import engine, init_db as create_tables
import sqlalchemy
import ui.interviews as interviews_page
import ui.interview_editor as editor_page
import ui.categories as categories_page
import ui.candidates as candidates_page

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


def init_db():
    """
    Ensure DB tables exist.
    """
    try:
        create_tables(engine)
    except sqlalchemy.exc.SQLAlchemyError as e:
        logger.exception("Database initialization failed")
        st.error(f"Database error during initialization: {e}")


def main():
    # Use "wide" layout for better tabbed interface
    st.set_page_config(page_title="Interview Tracker", layout="wide")
    init_db()

    st.title("Interview Tracker")

    tab_list = ["Interviews", "Interview Editor", "Categories", "Candidates"]
    tab1, tab2, tab3, tab4 = st.tabs(tab_list)

    with tab1:
        interviews_page.render_interviews()
    with tab2:
        editor_page.render_interview_editor()
    with tab3:
        categories_page.render_categories()
    with tab4:
        candidates_page.render_candidates()


if __name__ == "__main__":
    main()
