import streamlit as st

from utils.app_state import get_analysis_id, get_driver, get_selection, init_session_state, sidebar_controls
from utils.navigation import ONBOARDING_PAGE, PROGRESS_PAGE, continue_to

st.set_page_config(page_title="Xenith", page_icon=":chart_with_upwards_trend:")


def main() -> None:
    """Landing page: start a new analysis or return to the one in progress."""
    init_session_state()
    sidebar_controls()

    st.title("Xenith Market Research")
    st.markdown(
        "Analyze an Amazon product category: product listings, specifications, "
        "pricing and customer reviews, summarized into market insights."
    )

    selection = get_selection()
    driver = get_driver()
    if selection is not None and driver is not None:
        state = driver.simulator.snapshot()
        if state.completed:
            st.success(f"Analysis {get_analysis_id()} is complete.")
        else:
            st.info(f"Analysis {get_analysis_id()} is {round(state.overall_progress_percent)}% done.")
        if st.button("Open progress →"):
            continue_to(PROGRESS_PAGE)

    if st.button("New Market Analysis", type="primary"):
        continue_to(ONBOARDING_PAGE)


if __name__ == "__main__":
    main()
