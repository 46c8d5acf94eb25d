"""
Streamlit UI for the Career Assistant.

A tabbed dashboard over the REST API: profile, skills, education, goals,
AI advice and the Notion / GitHub / LinkedIn connections.
"""

import sys
from pathlib import Path

# Add parent directory to path so we can import from the root
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import streamlit as st

from config.settings import settings
from ui.api_client import ApiError, CareerApiClient
from utils.logging_config import configure_logging

# Page configuration
st.set_page_config(
    page_title="Career Assistant",
    page_icon="🧭",
    layout="wide"
)

configure_logging(settings.LOG_LEVEL)

STATUS_LABELS = {
    "connected": "🟢 Connected",
    "authorizing": "🟡 Waiting for authorization",
    "disconnected": "⚪ Not connected",
}


@st.cache_resource
def get_client():
    """Create and cache the API client."""
    return CareerApiClient(settings.API_BASE_URL, timeout=settings.HTTP_TIMEOUT_SECONDS)


def initialize_session_state():
    """Initialize Streamlit session state variables."""
    if "advice" not in st.session_state:
        st.session_state.advice = None
    if "linkedin" not in st.session_state:
        st.session_state.linkedin = None
    if "notion_exports" not in st.session_state:
        st.session_state.notion_exports = []


def show_error(e: ApiError):
    st.error(f"Error ({e.status_code}): {e.message}")


def run_action(action, *args, **kwargs) -> bool:
    """Call the API and show an error instead of raising. Returns True on success."""
    try:
        action(*args, **kwargs)
        return True
    except ApiError as e:
        show_error(e)
        return False


def render_profile_tab(client: CareerApiClient, profile: dict):
    st.subheader("Profile")
    with st.form("profile_form"):
        full_name = st.text_input("Full name", value=profile.get("full_name") or "")
        current_role = st.text_input("Current role", value=profile.get("current_role") or "")
        target_role = st.text_input("Target role", value=profile.get("target_role") or "")
        bio = st.text_area("Bio", value=profile.get("bio") or "", height=150)
        if st.form_submit_button("Save profile", type="primary"):
            try:
                client.update_profile(full_name, current_role, target_role, bio)
                st.success("Profile saved")
                st.rerun()
            except ApiError as e:
                show_error(e)


def render_skills_tab(client: CareerApiClient, skills: list):
    st.subheader("Skills")
    for skill in skills:
        col1, col2, col3 = st.columns([4, 2, 1])
        col1.markdown(f"**{skill['name']}** {('· ' + skill['category']) if skill.get('category') else ''}")
        col2.progress(skill["level"] / 5, text=f"Level {skill['level']}/5")
        if col3.button("Delete", key=f"delete_skill_{skill['id']}"):
            if run_action(client.delete_skill, skill["id"]):
                st.rerun()

    with st.form("skill_form", clear_on_submit=True):
        name = st.text_input("Skill")
        level = st.slider("Level", min_value=1, max_value=5, value=3)
        category = st.text_input("Category")
        if st.form_submit_button("Add skill"):
            if not name.strip():
                st.warning("Skill name is required")
            else:
                try:
                    client.add_skill(name.strip(), level, category.strip() or None)
                    st.rerun()
                except ApiError as e:
                    show_error(e)


def render_education_tab(client: CareerApiClient, education: list):
    st.subheader("Education")
    for record in education:
        col1, col2 = st.columns([6, 1])
        degree = " ".join(part for part in (record.get("degree"), record.get("field")) if part)
        period = " - ".join(part for part in (record.get("start_date"), record.get("end_date")) if part)
        col1.markdown(f"**{record['institution']}**  \n{degree} {f'({period})' if period else ''}")
        if col2.button("Delete", key=f"delete_education_{record['id']}"):
            if run_action(client.delete_education, record["id"]):
                st.rerun()

    with st.form("education_form", clear_on_submit=True):
        institution = st.text_input("Institution")
        col1, col2 = st.columns(2)
        degree = col1.text_input("Degree")
        field = col2.text_input("Field of study")
        start_date = col1.text_input("Start")
        end_date = col2.text_input("End")
        if st.form_submit_button("Add education"):
            if not institution.strip():
                st.warning("Institution is required")
            else:
                try:
                    client.add_education(
                        institution=institution.strip(),
                        degree=degree or None,
                        field=field or None,
                        start_date=start_date or None,
                        end_date=end_date or None,
                    )
                    st.rerun()
                except ApiError as e:
                    show_error(e)


def render_goals_tab(client: CareerApiClient, goals: list):
    st.subheader("Goals")
    for goal in goals:
        col1, col2, col3 = st.columns([1, 6, 1])
        done = col1.checkbox(
            "Done",
            value=goal["status"] == "completed",
            key=f"goal_done_{goal['id']}",
            label_visibility="collapsed",
        )
        target = "completed" if done else "pending"
        if target != goal["status"]:
            if run_action(client.set_goal_status, goal["id"], target):
                st.rerun()
        title = f"~~{goal['title']}~~" if goal["status"] == "completed" else f"**{goal['title']}**"
        col2.markdown(f"{title}  \n{goal.get('description') or ''} {('· due ' + goal['deadline']) if goal.get('deadline') else ''}")
        if col3.button("Delete", key=f"delete_goal_{goal['id']}"):
            if run_action(client.delete_goal, goal["id"]):
                st.rerun()

    with st.form("goal_form", clear_on_submit=True):
        title = st.text_input("Goal")
        description = st.text_area("Description", height=80)
        deadline = st.text_input("Deadline")
        if st.form_submit_button("Add goal"):
            if not title.strip():
                st.warning("Goal title is required")
            else:
                try:
                    client.add_goal(title.strip(), description or None, deadline or None)
                    st.rerun()
                except ApiError as e:
                    show_error(e)


def render_advice(advice: dict):
    st.markdown("### Analysis")
    st.write(advice["analysis"])
    for key, label in (("shortTerm", "Short term"), ("mediumTerm", "Medium term"), ("longTerm", "Long term")):
        st.markdown(f"#### {label}")
        for item in advice.get(key, []):
            st.markdown(f"- {item}")
    st.info(advice["motivation"])


def render_advice_tab(client: CareerApiClient, profile: dict):
    st.subheader("Career advice")

    col1, col2 = st.columns(2)
    if col1.button("Generate career advice", type="primary", use_container_width=True):
        with st.spinner("Thinking about your career..."):
            try:
                result = client.generate_advice("advice")
                st.session_state.advice = result.get("advice")
                st.session_state.notion_exports = result.get("notion_exports", [])
            except ApiError as e:
                show_error(e)
    if col2.button("Optimize LinkedIn profile", use_container_width=True):
        with st.spinner("Drafting LinkedIn suggestions..."):
            try:
                result = client.generate_advice("linkedin_optimize")
                st.session_state.linkedin = result.get("linkedin_optimization")
            except ApiError as e:
                show_error(e)

    for export in st.session_state.notion_exports:
        if export["success"]:
            st.success(f"Saved \"{export['title']}\" to Notion")
        else:
            st.warning(f"Could not save \"{export['title']}\" to Notion: {export.get('error')}")

    if st.session_state.advice:
        render_advice(st.session_state.advice)
        if profile.get("notion_connected"):
            title = st.text_input("Notion page title", value="Career Plan")
            if st.button("Save to Notion"):
                try:
                    page = client.export_to_notion(st.session_state.advice, title)
                    st.success("Page created")
                    if page.get("url"):
                        st.markdown(f"[Open in Notion]({page['url']})")
                except ApiError as e:
                    show_error(e)

    linkedin = st.session_state.linkedin
    if linkedin:
        st.markdown("### LinkedIn suggestions")
        headline = st.text_input("Headline", value=linkedin["headline"])
        about = st.text_area("About", value=linkedin["about"], height=200)
        st.markdown("**Experience tips**")
        for tip in linkedin.get("experienceTips", []):
            st.markdown(f"- {tip}")
        st.markdown("**Skills to highlight:** " + ", ".join(linkedin.get("skillsToHighlight", [])))
        if st.button("Apply to LinkedIn", disabled=not profile.get("linkedin_connected")):
            try:
                st.success(client.update_linkedin(headline, about)["message"])
            except ApiError as e:
                show_error(e)


def render_connection(client: CareerApiClient, service: str, label: str, state: str):
    col1, col2, col3 = st.columns([3, 2, 2])
    col1.markdown(f"**{label}**  \n{STATUS_LABELS.get(state, state)}")
    if state == "connected":
        if col3.button("Disconnect", key=f"disconnect_{service}"):
            if run_action(client.disconnect, service):
                st.rerun()
    else:
        if col2.button("Connect", key=f"connect_{service}"):
            try:
                url = client.authorization_url(service)
                st.session_state[f"auth_url_{service}"] = url
            except ApiError as e:
                show_error(e)
        url = st.session_state.get(f"auth_url_{service}")
        if url:
            col3.link_button("Authorize", url)
            st.caption("After authorizing in the new window, refresh this page.")


def render_integrations_tab(client: CareerApiClient):
    st.subheader("Integrations")
    try:
        status = client.connection_status()
    except ApiError as e:
        show_error(e)
        return

    render_connection(client, "notion", "Notion", status.get("notion", "disconnected"))
    if status.get("notion") != "connected":
        with st.expander("Use an internal integration secret instead"):
            token = st.text_input("Integration secret", type="password")
            if st.button("Save secret"):
                try:
                    client.connect_notion_manually(token)
                    st.rerun()
                except ApiError as e:
                    show_error(e)

    st.divider()
    render_connection(client, "github", "GitHub", status.get("github", "disconnected"))
    if status.get("github") == "connected":
        try:
            repos = client.list_github_repos()
        except ApiError as e:
            show_error(e)
            repos = []
        for repo in repos:
            with st.expander(repo.get("full_name") or repo.get("name", "")):
                st.write(repo.get("description") or "")
                if st.button("Show README", key=f"readme_{repo.get('id')}"):
                    owner = (repo.get("owner") or {}).get("login")
                    try:
                        st.markdown(client.get_github_readme(owner, repo.get("name")))
                    except ApiError as e:
                        show_error(e)

    st.divider()
    render_connection(client, "linkedin", "LinkedIn", status.get("linkedin", "disconnected"))


def main():
    initialize_session_state()
    client = get_client()

    st.title("🧭 Career Assistant")

    try:
        data = client.fetch_dashboard()
    except ApiError as e:
        show_error(e)
        st.stop()
    except Exception as e:
        st.error(f"Cannot reach the API at {settings.API_BASE_URL}: {e}")
        st.stop()

    tabs = st.tabs(["Profile", "Skills", "Education", "Goals", "Advice", "Integrations"])
    with tabs[0]:
        render_profile_tab(client, data["profile"])
    with tabs[1]:
        render_skills_tab(client, data["skills"])
    with tabs[2]:
        render_education_tab(client, data["education"])
    with tabs[3]:
        render_goals_tab(client, data["goals"])
    with tabs[4]:
        render_advice_tab(client, data["profile"])
    with tabs[5]:
        render_integrations_tab(client)


if __name__ == "__main__":
    main()
