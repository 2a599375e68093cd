# Role: Streamlit chat UI.
# - Backend is authoritative (history + loading flag live in the API process).
# - Empty history -> welcome screen; otherwise the scrollable chat screen.

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests
import streamlit as st

import gemini_chat.config
gemini_chat.config.load_env()

BACKEND_URL = gemini_chat.config.get_settings().backend_url
BACKEND_ERROR = "No se pudo contactar con el backend. Asegúrate de que la API está corriendo en " + BACKEND_URL


# ----------------------------
# Session helpers
# ----------------------------
def ensure_session() -> None:
    if "history" not in st.session_state:
        st.session_state["history"] = []
    if "busy" not in st.session_state:
        st.session_state["busy"] = False


def apply_snapshot(snapshot: Optional[Dict[str, Any]]) -> None:
    if snapshot is None:
        return
    st.session_state["history"] = list(snapshot.get("history") or [])
    st.session_state["busy"] = bool(snapshot.get("is_loading"))


# ----------------------------
# Backend calls
# ----------------------------
def send_prompt(prompt: str) -> Dict[str, Any]:
    # No client-side timeout: the backend owns the request lifetime.
    resp = requests.post(f"{BACKEND_URL}/chat", json={"prompt": prompt}, timeout=None)
    resp.raise_for_status()
    return resp.json()


def fetch_state() -> Optional[Dict[str, Any]]:
    try:
        r = requests.get(f"{BACKEND_URL}/state", timeout=10)
        if r.status_code != 200:
            return None
        return r.json()
    except requests.RequestException:
        return None


def submit(prompt: str) -> None:
    # 1) Ignore blank input (the controller itself accepts anything)
    # 2) Forward to the backend while showing the spinner
    # 3) Replace local history with the backend snapshot
    if not prompt or not prompt.strip() or st.session_state["busy"]:
        return

    st.session_state["busy"] = True
    try:
        with st.spinner("Generando respuesta..."):
            result = send_prompt(prompt)
        apply_snapshot(result.get("state"))
    except requests.RequestException:
        st.error(BACKEND_ERROR)
    finally:
        st.session_state["busy"] = False


# ----------------------------
# Screens
# ----------------------------
def render_welcome() -> None:
    st.markdown(
        """
<h2 style="background: linear-gradient(90deg, #4285F4, #EA4335, #FBBC05, #34A853);
           -webkit-background-clip: text; -webkit-text-fill-color: transparent;">
Bienvenido a Gemini 1.5 LV
</h2>
""",
        unsafe_allow_html=True,
    )

    prompt = st.text_area("Consulta", key="welcome_prompt", height=120, label_visibility="collapsed")
    clicked = st.button(
        "Generar consulta",
        disabled=st.session_state["busy"] or not (prompt or "").strip(),
    )
    if clicked:
        submit(prompt)
        st.rerun()


def render_history(lines: List[str]) -> None:
    with st.container(height=520):
        for line in lines:
            st.write(line)


def render_chat() -> None:
    render_history(st.session_state["history"])

    user_input = st.chat_input("Escribe tu mensaje…", disabled=st.session_state["busy"])
    if user_input:
        submit(user_input)
        st.rerun()


# ----------------------------
# Main
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="Gemini Chat", page_icon="🤖")

    ensure_session()
    apply_snapshot(fetch_state())

    if st.session_state["history"]:
        render_chat()
    else:
        render_welcome()


if __name__ == "__main__":
    main()
