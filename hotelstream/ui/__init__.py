"""Dashboard helpers; the Streamlit page lives in ``hotelstream.ui.dashboard``."""
from hotelstream.ui.views import balance_rows, fetch_json, metric_rows, reservation_rows

__all__ = ["balance_rows", "fetch_json", "metric_rows", "reservation_rows"]
