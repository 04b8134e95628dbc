"""
Shared UI components for Streamlit pages.
"""

import contextlib
import streamlit as st
from streamlit_searchbox import st_searchbox
from db.session import SessionLocal
from services.interview_repository import InterviewRepository


def open_repository() -> contextlib.closing:
    """
    Repository on a fresh session, closed when the `with` block ends:

        with open_repository() as repo:
            repo.get_interviews()
    """
    return contextlib.closing(InterviewRepository(SessionLocal()))


def render_header(title: str, caption: str = ""):
    st.markdown(f"### {title}")
    if caption:
        st.caption(caption)


def create_searchbox(
    label: str,
    placeholder: str,
    key: str,
    data: list,
    display_fn=lambda x: str(x),
    return_fn=lambda x: x,
):
    """
    Creates a Streamlit searchbox for selecting an item from data.

    :param label: Label for the searchbox
    :param placeholder: Placeholder text
    :param key: Unique key for Streamlit widget
    :param data: List of items (ORM rows or single values)
    :param display_fn: Function to format display text (default: str)
    :param return_fn: Function to extract return value (default: identity)
    :return: Selected value based on return_fn
    """
    options = {display_fn(item): return_fn(item) for item in data}

    def search_items(search_term: str):
        if not search_term:
            return list(options)
        return [item for item in options if search_term.lower() in item.lower()]

    selected = st_searchbox(
        search_items,
        placeholder=placeholder,
        label=label,
        key=key,
    )
    return options.get(selected)
