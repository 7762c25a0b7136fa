# Run from project root: streamlit run app/ui.py
# UI talks to backend API (POST /chat). The backend is stateless; chat history lives only in this session.

import os

import requests
import streamlit as st

# Backend config
API_BASE = os.environ.get("API_BASE", "http://localhost:8000")

st.title("Customer Support Agent")

try:
    r = requests.get(f"{API_BASE}/health", timeout=10)
    if not r.ok:
        st.caption("Backend health check failed.")
except requests.RequestException:
    st.caption("Backend not reachable — start the API first.")

if "messages" not in st.session_state:
    st.session_state.messages = []
if st.button("New chat", key="new_chat"):
    st.session_state.messages = []
    st.rerun()

# Show previous messages (local display only)
for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])
        if msg.get("action"):
            st.caption(f"Action taken: {msg['action']}")

# If we just submitted a query, show "Thinking..." while waiting for the response
if st.session_state.get("pending_query"):
    prompt = st.session_state.pending_query
    action = None
    with st.chat_message("assistant"):
        thinking_placeholder = st.empty()
        thinking_placeholder.caption("Thinking...")
        try:
            r = requests.post(f"{API_BASE}/chat", json={"user_query": prompt}, timeout=90)
            data = r.json()
            if r.status_code == 400:
                answer = data.get("error") or "Invalid request."
            else:
                answer = data.get("ai_response") or "No answer."
                action = data.get("action_taken")
        except (requests.RequestException, ValueError) as e:
            answer = f"Connection failed: {e}"
        thinking_placeholder.empty()
        st.markdown(answer)
        if action:
            st.caption(f"Action taken: {action}")
    st.session_state.messages.append({"role": "assistant", "content": answer, "action": action})
    del st.session_state["pending_query"]
    st.rerun()

# New message from user: show it immediately, then rerun so "Thinking..." appears
if prompt := st.chat_input("Ask about shipping, returns, support hours, your order, or book an appointment"):
    st.session_state.messages.append({"role": "user", "content": prompt})
    st.session_state.pending_query = prompt
    st.rerun()
