import html
import streamlit as st
from typing import Any, Dict, List

from agents.config import config
from dashboard.api_client import ApiClient, ApiError
from dashboard.charts import priority_bar, progress_donut
from dashboard.task_view import (
    MAX_TRANSCRIPT_LENGTH,
    SORT_OPTIONS,
    STATUS_FILTERS,
    collect_tags,
    count_by_status,
    filter_tasks,
    sort_tasks,
    time_ago,
    validate_transcript,
)

# -------- Streamlit page config --------
st.set_page_config(
    page_title="InsightBoard - AI Dashboard",
    layout="wide"
)

# -------- Styles --------
st.markdown("""
    <style>
    .status-dot { display: inline-block; width: 0.5rem; height: 0.5rem; border-radius: 50%; margin-right: 0.4rem; }
    .status-up { background-color: #22c55e; }
    .status-down { background-color: #ef4444; }
    .task-done { text-decoration: line-through; color: #6b7280; }
    .priority-URGENT { color: #ef4444; font-weight: bold; }
    .priority-HIGH { color: #f97316; font-weight: bold; }
    .priority-MEDIUM { color: #eab308; font-weight: bold; }
    .priority-LOW { color: #22c55e; font-weight: bold; }
    </style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_client() -> ApiClient:
    return ApiClient(config.get("API_BASE_URL"))


# -------- App class --------
class InsightBoardApp:
    def __init__(self, client: ApiClient):
        self.client = client
        self._init_session_state()

    def _init_session_state(self):
        defaults = {
            'tasks': [],
            'summary': None,
            'chart_data': None,
            'active_chart': 'Progress',
            'status_filter': 'all',
            'search_query': '',
            'priority_filter': 'All',
            'tag_filter': 'All',
            'sort_by': 'status',
            'transcript_text': '',
            'flash': None,
        }
        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

    # ---------------- data ----------------
    def refresh_data(self):
        try:
            tasks_data = self.client.get_tasks()
            st.session_state.tasks = tasks_data['tasks']
            st.session_state.summary = tasks_data['summary']
        except ApiError as e:
            st.error(f"Failed to load tasks: {e}")
        try:
            st.session_state.chart_data = self.client.get_task_stats()['chartData']
        except ApiError as e:
            st.warning(f"Failed to load stats: {e}")

    def submit_transcript(self, content: str) -> bool:
        try:
            response = self.client.create_transcript(content)
        except ApiError as e:
            st.error(f"Failed to process transcript: {e}")
            return False

        data = response['data']
        flash = f"Generated {len(data['tasks'])} action items from your transcript!"
        if data.get('taskSource') == 'fallback':
            flash += " The language model was unavailable, so a sample task set was used."
        st.session_state.flash = flash
        return True

    def toggle_task(self, task: Dict[str, Any]):
        new_status = 'PENDING' if task['status'] == 'COMPLETED' else 'COMPLETED'
        try:
            self.client.update_task(task['id'], status=new_status)
            st.toast("Task marked as completed!" if new_status == 'COMPLETED' else "Task marked as pending")
        except ApiError as e:
            st.toast(f"Failed to update task status: {e}")
        self.refresh_data()

    def delete_task(self, task_id: str):
        try:
            self.client.delete_task(task_id)
            st.toast("Task deleted successfully")
        except ApiError as e:
            st.toast(f"Failed to delete task: {e}")
        self.refresh_data()

    def clear_filters(self):
        st.session_state.search_query = ''
        st.session_state.status_filter = 'all'
        st.session_state.priority_filter = 'All'
        st.session_state.tag_filter = 'All'

    # ---------------- rendering ----------------
    def render_header(self):
        health = self.client.health_check()
        left, right = st.columns([4, 1])
        with left:
            st.markdown("## 🧠 InsightBoard")
            st.caption("AI Dashboard")
        with right:
            dot, label = ('status-up', 'Connected') if health['connected'] else ('status-down', 'Disconnected')
            st.markdown(f"<span class='status-dot {dot}'></span>{label}", unsafe_allow_html=True)
        st.markdown("---")

    def render_intro(self):
        st.markdown("""
        # Transform Meetings into Action
        Submit your meeting transcripts and let AI extract actionable tasks.
        Track progress with visualizations.
        """)

    def render_transcript_form(self):
        st.subheader("Meeting Transcript")
        content = st.text_area(
            "Paste your meeting transcript here...",
            key="transcript_text",
            height=220,
        )
        error = validate_transcript(content) if content else None
        st.caption(f"{len(content):,} / {MAX_TRANSCRIPT_LENGTH:,} characters")
        if error:
            st.warning(error)

        if st.button("✨ Generate Action Items", disabled=not content or error is not None,
                     use_container_width=True):
            with st.spinner("Extracting tasks..."):
                if self.submit_transcript(content):
                    self.refresh_data()
                    st.rerun()

        if st.session_state.flash:
            st.success(st.session_state.flash)
            st.session_state.flash = None

    def render_stats(self):
        summary = st.session_state.summary
        if not summary:
            return
        col1, col2 = st.columns(2)
        col1.metric("Total Tasks", summary['totalTasks'])
        col2.metric("Completed", f"{summary['completionPercentage']}%")

    def render_charts(self):
        st.radio("Chart", ['Progress', 'Priority'], key='active_chart', horizontal=True,
                 label_visibility="collapsed")
        chart_data = st.session_state.chart_data
        total = sum(item['value'] for item in chart_data['pieChart']) if chart_data else 0

        if st.session_state.active_chart == 'Progress':
            st.subheader("Progress Overview")
            if not total:
                st.info("Submit a transcript and generate tasks to see your progress visualization.")
                return
            st.altair_chart(progress_donut(chart_data['pieChart']), use_container_width=True)
            completed = next((i['value'] for i in chart_data['pieChart'] if i['name'] == 'Completed'), 0)
            st.progress(completed / total, text=f"{completed} of {total} completed")
            if completed == total:
                st.success("All tasks completed! 🎉")
        else:
            st.subheader("Priority Distribution")
            if not total:
                st.info("Submit a transcript and generate tasks to see priority distribution.")
                return
            st.altair_chart(priority_bar(chart_data['barChart']), use_container_width=True)

    def render_task_list(self):
        tasks: List[Dict[str, Any]] = st.session_state.tasks
        summary = st.session_state.summary

        header, counts = st.columns([3, 2])
        header.subheader("Your Action Items")
        if summary:
            counts.caption(f"{summary['pendingTasks']} pending, {summary['completedTasks']} completed")

        if not tasks:
            st.info("No tasks yet. Submit a meeting transcript above to generate your first set of action items.")
            return

        status_counts = count_by_status(tasks)
        st.text_input("Search tasks...", key="search_query")
        col1, col2, col3, col4 = st.columns(4)
        col1.radio(
            "Status", STATUS_FILTERS, key="status_filter", horizontal=True,
            format_func=lambda f: f"{f.capitalize()} ({status_counts[f]})",
        )
        col2.selectbox("Priority", ['All', 'URGENT', 'HIGH', 'MEDIUM', 'LOW'], key="priority_filter")
        col3.selectbox("Tag", ['All'] + collect_tags(tasks), key="tag_filter")
        col4.selectbox("Sort by", list(SORT_OPTIONS), key="sort_by", format_func=SORT_OPTIONS.get)

        visible = sort_tasks(
            filter_tasks(
                tasks,
                status=st.session_state.status_filter,
                query=st.session_state.search_query,
                priority=None if st.session_state.priority_filter == 'All' else st.session_state.priority_filter,
                tag=None if st.session_state.tag_filter == 'All' else st.session_state.tag_filter,
            ),
            st.session_state.sort_by,
        )

        filtered = (st.session_state.search_query or st.session_state.status_filter != 'all'
                    or st.session_state.priority_filter != 'All' or st.session_state.tag_filter != 'All')
        if filtered:
            info, clear = st.columns([4, 1])
            matching = f' matching "{st.session_state.search_query}"' if st.session_state.search_query else ''
            info.caption(f"Showing {len(visible)} of {len(tasks)} task{'s' if len(tasks) != 1 else ''}{matching}")
            clear.button("Clear filters", on_click=self.clear_filters)

        if not visible:
            st.info("No tasks found. Try adjusting your search or filter criteria.")
            return

        for task in visible:
            self._render_task(task)

    def _render_task(self, task: Dict[str, Any]):
        done = task['status'] == 'COMPLETED'
        with st.container(border=True):
            check, body, actions = st.columns([1, 10, 1])
            check.checkbox(
                "Done", value=done, key=f"done_{task['id']}_{task['updatedAt']}",
                on_change=self.toggle_task, args=(task,), label_visibility="collapsed",
            )
            title_class = "task-done" if done else ""
            body.markdown(
                f"<span class='{title_class}'><strong>{html.escape(task['title'])}</strong></span> "
                f"<span class='priority-{task['priority']}'>{task['priority']}</span> "
                f"{'✅ Completed' if done else '🕒 Pending'}",
                unsafe_allow_html=True,
            )
            if task.get('description'):
                body.markdown(f"<span class='{title_class}'>{html.escape(task['description'])}</span>", unsafe_allow_html=True)
            tags = " ".join(f"`{tag}`" for tag in task.get('tags') or [])
            body.caption(f"📅 Created {time_ago(task['createdAt'])} {tags}")

            with actions.popover("🗑️"):
                st.markdown("Are you sure you want to delete this task? This action cannot be undone.")
                st.button("Delete Task", key=f"delete_{task['id']}", type="primary",
                          on_click=self.delete_task, args=(task['id'],))


def main():
    app = InsightBoardApp(get_client())
    app.render_header()
    app.render_intro()
    if st.session_state.summary is None:
        app.refresh_data()

    left, right = st.columns(2)
    with left:
        app.render_transcript_form()
        app.render_stats()
    with right:
        app.render_charts()

    st.markdown("---")
    app.render_task_list()


if __name__ == "__main__":
    main()
