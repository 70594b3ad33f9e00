"""Streamlit dashboard over the hotelstream API."""
from pathlib import Path

import requests
import streamlit as st

# Allow running via "streamlit run hotelstream/ui/dashboard.py" without installing the package
# by ensuring the repository root is on ``sys.path``.
if __package__ in {None, ""}:
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[2]))

from hotelstream.core.utils import get_config_value
from hotelstream.ui.views import DEFAULT_API_URL, balance_rows, fetch_json, metric_rows, reservation_rows


def _store_overview(summary: dict) -> None:
    """Headline counts for the stats store."""

    cols = st.columns(3)
    cols[0].metric("Stats", summary.get("stats_count", 0))
    cols[1].metric("Balances", summary.get("balances_count", 0))
    cols[2].metric("Unclassified", summary.get("raw_count", 0))
    st.caption(f"Last updated {summary.get('last_updated', 'n/a')}")


def _metric_chart(rows: list) -> None:
    numeric = {}
    for row in rows:
        if isinstance(row["value"], (int, float)) and not isinstance(row["value"], bool):
            numeric[row["metric"]] = row["value"]
    if numeric:
        st.bar_chart(numeric)


def main() -> None:
    """Render the live stream dashboard."""

    st.set_page_config(page_title="Hotel Stream", layout="wide")
    st.title("PMS Stream Monitor")

    api_url = st.sidebar.text_input("API URL", get_config_value("HOTELSTREAM_API_URL", DEFAULT_API_URL))
    limit = st.sidebar.slider("Latest entries", min_value=5, max_value=100, value=10)
    if st.sidebar.button("Poll stats stream now"):
        try:
            fetch_json(api_url, "/api/stats/poll")
            st.sidebar.success("Stats stream polled")
        except requests.RequestException as exc:
            st.sidebar.error(f"Poll failed: {exc}")

    try:
        summary = fetch_json(api_url, "/api/stats/summary")
        latest = fetch_json(api_url, f"/api/stats/latest?limit={limit}")
        events = fetch_json(api_url, "/api/stream/latest")
    except requests.RequestException as exc:
        st.error(f"Could not reach the API at {api_url}: {exc}")
        return

    _store_overview(summary)
    stats_tab, balances_tab, reservations_tab = st.tabs(["Statistics", "Balances", "Reservations"])

    with stats_tab:
        rows = metric_rows(latest["stats"]["data"])
        if rows:
            _metric_chart(rows)
            st.dataframe(rows, use_container_width=True, hide_index=True)
        else:
            st.info("No statistics captured yet.")

    with balances_tab:
        rows = balance_rows(latest["balances"]["data"])
        if rows:
            st.dataframe(rows, use_container_width=True, hide_index=True)
        else:
            st.info("No balance events captured yet.")

    with reservations_tab:
        rows = reservation_rows(events[-limit:])
        if rows:
            st.dataframe(rows, use_container_width=True, hide_index=True)
        else:
            st.info("No primary-stream events received yet.")


if __name__ == "__main__":
    main()
