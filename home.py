# home.py
import streamlit as st
st.set_page_config(page_title="Rig Curve Analyzer", page_icon="🧪", layout="wide")

st.title("🧪 Compression Rig: Displacement–Force")
st.write("Upload a rig export → stiffness, area, maximum strength → adjust points → export results.")

with st.expander("What this app does"):
    st.markdown("""
- Reads rig text exports (tab or comma separated, 5 channels)
- Flips the rig's negative compression sign, removes pre-load slack, cuts data after failure
- Finds the steepest elastic slope and the line through the most samples
- Area under the curve (trapezoidal), maximum strength
- Movable slope and yield points, one results row per file, CSV download
""")

if "session" in st.session_state:
    st.success(f"Current file: **{st.session_state['session'].file_name}**")
else:
    st.info("Start with **Upload & QA/QC**.")
