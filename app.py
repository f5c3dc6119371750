import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import streamlit as st

import core.logging_config  # noqa: F401
from core.data import load_dashboard_data, prepare_context
from core.filters import ALL_SECTORS, DashboardFilters, pick_initial_year
from core.metrics_insights import compute_insights
from core.metrics_overview import compute_overview
from core.metrics_trends import compute_trends

logger = logging.getLogger(__name__)


# ---------- UI / layout helpers ----------
def inject_base_styles():
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e2e8f0;margin-bottom: 10px;}
        .app-top-bar .breadcrumb {color: #a0aec0;font-size: 0.9rem;margin-bottom: 2px;}
        .app-top-bar .page-title {font-size: 1.6rem;font-weight: 600;color: #111827;}
        .kpi-value {font-size: 2rem;font-weight: 700;}
        .kpi-caption {font-size: 0.875rem;color: #a0aec0;}
        .recent-title {font-size: 0.875rem;font-weight: 500;margin: 0;}
        .recent-added {font-size: 0.75rem;color: #a0aec0;margin: 0 0 8px;}
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str):
    container = st.container(border=True)
    container.markdown(f"**{title}**")
    with container:
        yield container


def render_page_header(title: str, breadcrumb: str):
    st.markdown(
        f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
        unsafe_allow_html=True,
    )


def render_chart(spec: Optional[Dict[str, Any]], empty_message: str = "No data to chart."):
    if not spec:
        st.info(empty_message)
        return
    st.vega_lite_chart(spec=spec, use_container_width=True)


# ---------- Login ----------
def render_login_page():
    """Cosmetic sign-in: any submit opens the dashboard, nothing is validated."""
    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.markdown("<h2 style='text-align:center'>DataViz Pro</h2>", unsafe_allow_html=True)
        st.caption("Sign in to your account")
        with st.form("login"):
            st.text_input("Email", placeholder="you@example.com")
            st.text_input("Password", type="password", placeholder="Enter your password")
            st.checkbox("Remember me")
            submitted = st.form_submit_button("Sign in", use_container_width=True)
        if submitted:
            st.session_state["signed_in"] = True
            st.rerun()


# ---------- Data ----------
def ensure_data_loaded() -> Dict[str, object]:
    # One fetch per session; the year filter is seeded right after it.
    if "data_ctx" not in st.session_state:
        data_ctx = load_dashboard_data()
        st.session_state["data_ctx"] = data_ctx
        st.session_state["selected_year"] = pick_initial_year(data_ctx.get("years", []))
        logger.info("Dashboard data loaded: %d records", len(data_ctx["records"]))
    return st.session_state["data_ctx"]


# ----- Page renderers -----
def render_kpi_tiles(kpis: Dict[str, Optional[float]]):
    cols = st.columns(len(kpis))
    for col, (key, value) in zip(cols, kpis.items()):
        label = key.replace("avg_", "").capitalize()
        with col:
            with card(f"Average {label}"):
                shown = f"{value:.2f}" if value is not None else "N/A"
                st.markdown(f"<div class='kpi-value'>{shown}</div><div class='kpi-caption'>Average {label.lower()}</div>", unsafe_allow_html=True)


def render_overview_page(filters: DashboardFilters, ctx: Dict[str, Any]):
    render_page_header("Global Insights Dashboard", "Home / Overview")
    payload = compute_overview(filters, ctx)
    render_kpi_tiles(payload["kpis"])
    with card("Sector Comparison"):
        render_chart(payload["charts"].get("sector_comparison"))
    with card("Regional Distribution"):
        render_chart(payload["charts"].get("regional_distribution"))


def render_trends_page(filters: DashboardFilters, ctx: Dict[str, Any]):
    render_page_header("Trends Analysis", "Home / Trends")
    payload = compute_trends(filters, ctx)
    with card("Recent Insights"):
        if not payload["recent"]:
            st.info("No insights loaded.")
        for item in payload["recent"]:
            st.markdown(
                f"<p class='recent-title'>{item['title']}</p><p class='recent-added'>{item['added']}</p>",
                unsafe_allow_html=True,
            )


def render_insights_page(filters: DashboardFilters, ctx: Dict[str, Any]):
    render_page_header("Insights Charts", "Home / Insights")
    payload = compute_insights(filters, ctx)
    with card("Insights - Area Chart"):
        render_chart(payload["charts"].get("area"))
    with card("Insights - Radar Chart"):
        render_chart(payload["charts"].get("radar"))
    with card("Insights - Vertical Bar Chart"):
        render_chart(payload["charts"].get("yearly_bar"))


# ---------- UI setup ----------
st.set_page_config(page_title="Global Insights Dashboard", layout="wide")
inject_base_styles()

if not st.session_state.get("signed_in"):
    render_login_page()
    st.stop()

data_ctx = ensure_data_loaded()
years: List[str] = list(data_ctx.get("years", []))
sectors: List[str] = list(data_ctx.get("sectors", []))

with st.sidebar:
    st.markdown("## Global Insights")
    nav_choice = st.radio("Navigate", ["Overview", "Trends Analysis", "Insights Charts"], index=0)
    st.markdown("---")
    selected_sector = st.selectbox("Sector", options=[ALL_SECTORS] + sectors, format_func=lambda s: "All Sectors" if s == ALL_SECTORS else s)
    selected_year = None
    if years:
        current = st.session_state.get("selected_year")
        selected_year = st.selectbox("Select Year", options=years, index=years.index(current) if current in years else 0)
        st.session_state["selected_year"] = selected_year
    if st.button("Reload data"):
        st.session_state.pop("data_ctx", None)
        st.rerun()

filters = DashboardFilters(selected_year=selected_year, selected_sector=selected_sector)
ctx = prepare_context(filters, data_ctx)

if nav_choice == "Overview":
    render_overview_page(filters, ctx)
elif nav_choice == "Trends Analysis":
    render_trends_page(filters, ctx)
else:
    render_insights_page(filters, ctx)
