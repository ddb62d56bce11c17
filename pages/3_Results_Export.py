# pages/3_Results_Export.py
import streamlit as st

from rigcurve import ResultLog

st.title("Results & Export")

results: ResultLog = st.session_state.setdefault("results", ResultLog())

if not len(results):
    st.info("Analyze a test and press **Add to results** first."); st.stop()

st.write(f"{len(results)} analysed file(s) this session.")
st.dataframe(results.to_frame(), use_container_width=True)

c1, c2 = st.columns(2)
c1.download_button("⬇️ Download results CSV", results.to_csv(), results.file_name, "text/csv")
if c2.button("🗑️ Clear results"):
    results.clear()
    st.rerun()
