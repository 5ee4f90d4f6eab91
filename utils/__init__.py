"""Streamlit-side helpers: session state, navigation, views and logging setup."""
