"""
Core package for the project dashboard application.

Submodules provide project records, record stores, view filtering, metrics,
and the Streamlit rendering helpers orchestrated by the top-level `app.py`.
"""
