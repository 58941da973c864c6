"""
Extension Monitor — store versions vs. submitted versions, at a glance.
Run with: streamlit run extension_monitor/dashboard.py
"""

import logging

import streamlit as st
import plotly.graph_objects as go

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from extension_monitor.cards import (
    BADGE_STYLES, render_card_header, render_submitted, render_version_badges,
)
from extension_monitor.config import CACHE_TTL_SECONDS, configure_logging
from extension_monitor.fetcher import FeedUnavailableError, fetch_extension_feed
from extension_monitor.formatting import (
    display_users, format_relative_time, parse_user_count, store_table,
)
from extension_monitor.models import ExtensionReport
from extension_monitor.processor import build_reports

configure_logging()
logger = logging.getLogger(__name__)

# ============================================================
# PAGE CONFIG
# ============================================================
st.set_page_config(
    page_title="Extension Monitor",
    page_icon="◆",
    layout="wide",
)

# ============================================================
# STYLING — applied ONCE at the top of every render
# ============================================================
CUSTOM_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap');
html, body, [class*="css"] { font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif; }

footer {visibility: hidden;}
#MainMenu {visibility: hidden;}

:root {
    --bg-elevated: #2d2b26;
    --border: rgba(255,235,205,0.08);
    --text-primary: #e8e0d5;
    --text-secondary: #9c9588;
    --text-muted: #6b6560;
}

/* Status badges */
.em-badge {
    display: inline-flex; align-items: center; gap: 6px;
    padding: 2px 8px; border-radius: 6px; font-size: 0.75rem; font-weight: 500;
}
.em-badge .dot { width: 5px; height: 5px; border-radius: 50%; background: currentColor; }
.em-version {
    background: var(--bg-elevated); border: 1px solid var(--border);
    border-radius: 6px; padding: 1px 6px; margin-right: 6px;
    font-family: ui-monospace, monospace; font-size: 0.75rem;
}
.em-version small { color: var(--text-muted); font-size: 0.65rem; margin-left: 2px; }

/* Dataframes */
[data-testid="stDataFrame"] { border: 1px solid var(--border); border-radius: 10px; }
hr { border-color: var(--border); }
</style>
"""

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)


def apply_chart_style(fig):
    fig.update_layout(
        font=dict(family="Inter, sans-serif", color="#9c9588"),
        paper_bgcolor="rgba(0,0,0,0)", plot_bgcolor="rgba(0,0,0,0)",
        title_font=dict(size=14, color="#e8e0d5"),
        xaxis=dict(gridcolor="rgba(255,235,205,0.04)", linecolor="rgba(255,235,205,0.08)",
                   tickfont=dict(color="#9c9588")),
        yaxis=dict(gridcolor="rgba(255,235,205,0.04)", linecolor="rgba(255,235,205,0.08)",
                   tickfont=dict(color="#9c9588")),
        margin=dict(l=40, r=20, t=45, b=35),
    )
    return fig


# ============================================================
# DATA
# ============================================================

# Upstream snapshot is reused for CACHE_TTL_SECONDS; classification runs fresh every render
@st.cache_data(ttl=CACHE_TTL_SECONDS, show_spinner="Fetching store data...")
def load_feed() -> dict:
    return fetch_extension_feed()


# ============================================================
# RENDERING
# ============================================================
def chart_users_by_store(report: ExtensionReport):
    bars = []
    for record, row in report.rows:
        if display_users(record) == "-":
            continue
        users = parse_user_count(record.users)
        if users:
            bars.append((record.store.capitalize(), users, BADGE_STYLES[row.status][1]))
    if not bars:
        return
    fig = go.Figure(go.Bar(
        x=[store for store, _, _ in bars], y=[users for _, users, _ in bars],
        marker_color=[color for _, _, color in bars],
    ))
    fig.update_layout(title="Users by store", height=260, yaxis_title="Users", xaxis_title="")
    apply_chart_style(fig)
    st.plotly_chart(fig, use_container_width=True, key=f"users_{report.group.name}")


def render_extension_card(report: ExtensionReport):
    group = report.group
    with st.container(border=True):
        last_checked = ""
        if group.stores:
            last_checked = f"last updated {format_relative_time(group.stores[0].last_checked)}"

        st.markdown(render_card_header(report, last_checked), unsafe_allow_html=True)

        st.markdown(f'<span style="color:#9c9588; font-size:0.75rem;">Live:</span> '
                    f'{render_version_badges(report)}', unsafe_allow_html=True)
        submitted = render_submitted(report)
        if submitted:
            st.markdown(submitted, unsafe_allow_html=True)

        col_table, col_chart = st.columns([3, 2])
        with col_table:
            colors = [row.emphasis for _, row in report.rows]
            table = store_table(report.rows).style.apply(
                lambda column: [f"color: {c}; font-weight: 600" for c in colors],
                subset=["Version"],
            )
            st.dataframe(
                table,
                hide_index=True,
                use_container_width=True,
                column_config={"Link": st.column_config.LinkColumn("Link", display_text="open ↗")},
            )
        with col_chart:
            chart_users_by_store(report)


# ============================================================
# MAIN
# ============================================================
def main():
    header_col, button_col = st.columns([5, 1])
    with header_col:
        st.markdown("""
        <div style="display:flex; align-items:center; gap:10px;">
            <span style="font-size:1.3rem; color:#d97757;">◆</span>
            <span style="font-size:1.3rem; font-weight:700; color:#e8e0d5;">Extension Monitor</span>
        </div>""", unsafe_allow_html=True)
    with button_col:
        if st.button("↻ Refresh", use_container_width=True):
            load_feed.clear()
            st.rerun()

    try:
        raw_feed = load_feed()
    except FeedUnavailableError as e:
        st.error(f"Error: {e}")
        st.stop()

    reports = build_reports(raw_feed)
    if not reports:
        st.info("The feed contained no extension listings.")
        return

    logger.info("Rendering %d extension groups", len(reports))
    for report in reports:
        render_extension_card(report)


if __name__ == "__main__":
    main()
