"""
Category picker for the "New Market Analysis" screen.
Lets the user search the taxonomy, pick a category and subcategory, and start.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from config import is_enabled
from market import CategorySelector, PreconditionError, Selection
from market.plan import ANALYSIS_PREVIEW

_PLACEHOLDER = "Choose a specific subcategory..."


class CategoryPicker:
    """Renders a CategorySelector; all selection rules live in the selector."""

    def __init__(self, selector: CategorySelector, columns: int = 3):
        self.selector = selector
        self.columns = columns

    def render(self) -> Optional[Selection]:
        """
        Render the picker.
        Returns the Selection when the user presses Start, otherwise None.
        """
        st.title("Choose Your Market Category")
        st.markdown(
            "Select the Amazon product category you want to analyze. Xenith will collect "
            "product listings, specifications, pricing, and customer reviews."
        )

        query = st.text_input("Search categories...", key="category_search")
        self._render_categories(query)

        category = self.selector.selected_category
        if category is None:
            return None
        self._render_subcategories()

        if not self.selector.is_ready_to_start():
            return None
        return self._render_preview()

    def _render_categories(self, query: str) -> None:
        matches = self.selector.search(query)
        if not matches:
            st.info("No categories match your search.")
            return

        cols = st.columns(self.columns)
        for i, category in enumerate(matches):
            with cols[i % self.columns]:
                selected = category.id == self.selector.category_id
                if st.button(
                    category.name,
                    key=f"category_{category.id}",
                    type="primary" if selected else "secondary",
                    use_container_width=True,
                ):
                    self.selector.select_category(category.id)
                    st.session_state.pop("subcategory_choice", None)
                    st.rerun()
                st.caption(f"{len(category.subcategories)} subcategories available")

    def _render_subcategories(self) -> None:
        category = self.selector.selected_category
        st.markdown(f"#### Select {category.name} Subcategory")
        options = [_PLACEHOLDER, *category.subcategories]
        choice = st.selectbox(
            "Subcategory",
            options=options,
            format_func=lambda sub: sub if sub == _PLACEHOLDER else f"{category.name} > {sub}",
            key="subcategory_choice",
            label_visibility="collapsed",
        )
        if choice != _PLACEHOLDER:
            self.selector.select_subcategory(choice)

    def _render_preview(self) -> Optional[Selection]:
        category = self.selector.selected_category
        if is_enabled("XN_ENABLE_ANALYSIS_PREVIEW"):
            st.markdown("#### Analysis Preview")
            cols = st.columns(len(ANALYSIS_PREVIEW))
            for col, item in zip(cols, ANALYSIS_PREVIEW):
                with col:
                    st.metric(f"{item['icon']} {item['label']}", item["value"])

        st.success(f"Ready to analyze: {category.name} > {self.selector.subcategory}")
        if st.button("Start Analysis →", type="primary"):
            try:
                return self.selector.start()
            except PreconditionError as e:
                st.error(str(e))
        return None
