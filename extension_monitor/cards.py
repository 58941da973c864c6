"""
HTML fragments for the extension cards.

Everything that comes from the feed (names, versions, links) is escaped
here before it reaches st.markdown(unsafe_allow_html=True).
"""

from html import escape

from extension_monitor.formatting import format_date
from extension_monitor.models import ExtensionReport, Status

# Badge background / text per group status
BADGE_STYLES = {
    Status.LIVE: ("rgba(107,191,122,0.14)", "#6bbf7a"),
    Status.PENDING: ("rgba(111,168,220,0.14)", "#6fa8dc"),
    Status.MISMATCH: ("rgba(224,108,95,0.14)", "#e06c5f"),
}
NEUTRAL_VERSION_COLOR = "#9c9588"


def render_status_badge(report: ExtensionReport) -> str:
    bg, fg = BADGE_STYLES[report.status.status]
    return (f'<span class="em-badge" style="background:{bg}; color:{fg};">'
            f'<span class="dot"></span>{escape(report.status.message)}</span>')


def render_card_header(report: ExtensionReport, last_checked: str) -> str:
    return f"""
        <div style="display:flex; align-items:center; gap:12px;">
            <span style="font-size:1.15rem; font-weight:700; color:#e8e0d5;">{escape(report.group.name)}</span>
            {render_status_badge(report)}
            <span style="color:#6b6560; font-size:0.75rem; margin-left:auto;">{escape(last_checked)}</span>
        </div>"""


def render_version_badges(report: ExtensionReport) -> str:
    badges = []
    for badge in report.badges:
        color = BADGE_STYLES[badge.status][1] if badge.status else NEUTRAL_VERSION_COLOR
        badges.append(f'<span class="em-version" style="color:{color};">{escape(badge.version)}'
                      f'<small>({badge.count})</small></span>')
    return "".join(badges)


def render_submitted(report: ExtensionReport) -> str:
    """Submitted version linked to its release page; empty when nothing is submitted."""
    group = report.group
    if not group.submitted_version:
        return ""
    color = BADGE_STYLES[Status.LIVE][1] if report.submitted_is_live else "#e8e0d5"
    date_part = ""
    if group.release_date:
        date_part = f" <small>({escape(format_date(group.release_date))})</small>"
    href = escape(report.release_url or "", quote=True)
    return (f'<span style="color:#9c9588; font-size:0.75rem;">Submitted:</span> '
            f'<a class="em-version" style="color:{color}; text-decoration:none;" '
            f'href="{href}" target="_blank">{escape(group.submitted_version)}{date_part} ↗</a>')
