# =============================================================================
# streamlit_app.py — Glide Functions playground: Generate, Random, Coordinates
# =============================================================================
# Run: streamlit run streamlit_app.py
# Backend: BACKEND_URL (default http://127.0.0.1:8000)
# =============================================================================

import os

import requests
import streamlit as st

# No trailing slash so paths like /functions/generate work
BASE_URL = (os.environ.get("BACKEND_URL") or "http://127.0.0.1:8000").rstrip("/")


def call_function(name: str, params: dict) -> dict | None:
    """POST params to a function route, wrapped the way the host sends them."""
    url = f"{BASE_URL}/functions/{name}"
    body = {k: {"value": v} for k, v in params.items()}
    try:
        r = requests.post(url, json=body, timeout=120)
        r.raise_for_status()
        return r.json()
    except requests.exceptions.HTTPError as e:
        if e.response is not None and e.response.status_code == 404:
            st.error(f"Not Found (404). Backend may be wrong or outdated. Using: {BASE_URL}")
        else:
            st.error(f"Request failed: {e}")
        return None
    except requests.exceptions.RequestException as e:
        st.error(f"Request failed: {e}")
        return None


def show_result(out: dict | None) -> None:
    if out is None:
        st.info("No response. Check the backend is running.")
        return
    if out.get("ok"):
        st.success("ok")
    else:
        st.warning("error")
    st.code(str(out.get("value", "")), language=None)


st.set_page_config(page_title="Glide Functions", layout="centered")
st.title("Glide Functions")
with st.sidebar:
    st.caption(f"Backend: `{BASE_URL}`")
    st.caption("Start both: `python run.py`")

tab_generate, tab_random, tab_coords = st.tabs(["Generate", "Random", "Coordinates"])

with tab_generate:
    st.subheader("Generate text")
    api_key = st.text_input("API key", type="password")
    model = st.text_input(
        "Model",
        placeholder="gpt-4o-mini, claude-3-5-sonnet-20241022, gemini-1.5-flash or 'list'",
    )
    prompt = st.text_area("Prompt", height=120)
    attachment = st.text_input("Attachment URL (Gemini only)")
    col_t, col_m = st.columns(2)
    temperature = col_t.slider("Temperature", 0.0, 2.0, 0.7, 0.1)
    max_tokens = col_m.number_input("Max tokens", min_value=1, value=1000, step=50)
    if st.button("Generate", type="primary"):
        with st.spinner("Calling provider..."):
            out = call_function(
                "generate",
                {
                    "prompt": prompt,
                    "apiKey": api_key,
                    "model": model,
                    "temperature": temperature,
                    "maxTokens": int(max_tokens),
                    "attachment": attachment or None,
                },
            )
        show_result(out)

with tab_random:
    st.subheader("Random number")
    key = st.text_input("Key (empty = new number every time)")
    col_lo, col_hi = st.columns(2)
    low = col_lo.number_input("Min", value=0.0)
    high = col_hi.number_input("Max", value=1.0)
    if st.button("Draw"):
        show_result(call_function("random", {"key": key, "min": low, "max": high}))

with tab_coords:
    st.subheader("Format coordinates")
    location = st.text_input("Location", placeholder='40.7128,-74.0060 or {"lat": 40.7128, "lng": -74.006}')
    fmt = st.selectbox("Format", ["lat,lng", "lng,lat", "lat", "lng", "json", "geojson", "url"])
    precision = st.number_input("Precision (-1 = as given)", min_value=-1, max_value=12, value=-1)
    if st.button("Format"):
        params = {"location": location, "format": fmt}
        if precision >= 0:
            params["precision"] = int(precision)
        show_result(call_function("coordinates", params))
