import streamlit as st
import io
import logging
from datetime import datetime, time

from analysis.formatting import overlaps_to_dataframe, pair_totals_to_dataframe
from analysis.report import analyze_upload
from config import AppConfig, DateConfig, LoaderConfig
from exceptions import ConfigError
from utils.logger import LOG_FORMAT, setup_logger
from visualization import export_overlaps_to_excel, plot_pair_totals

# Set page config
st.set_page_config(
    page_title="Employee Pair Finder",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom class to capture log output for display on the page
class StreamlitLogger(io.StringIO):
    def __init__(self, container):
        super().__init__()
        self.container = container
        self.log_content = ""

    def write(self, text):
        self.log_content += text
        self.container.code(self.log_content)
        return len(text)

    def flush(self):
        pass

# Route this session's log records into a page widget
def capture_logs(log_container):
    logger = setup_logger(level=logging.INFO)
    handler = logging.StreamHandler(StreamlitLogger(log_container))
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.handlers = [handler]
    return logger

# Build configuration from the sidebar controls
def sidebar_config():
    st.sidebar.header("Settings")
    delimiter = st.sidebar.selectbox(
        "Delimiter",
        options=[",", ";", "\t", "|"],
        format_func=lambda d: {"\t": "Tab"}.get(d, d),
        help="Column separator used in the uploaded file",
    )
    pivot = st.sidebar.number_input(
        "Two-digit year pivot",
        min_value=0,
        max_value=100,
        value=70,
        help="Two-digit years below this value are read as 20xx, others as 19xx",
    )
    as_of_date = st.sidebar.date_input(
        "Evaluate ongoing assignments as of",
        value=datetime.now().date(),
        help="End date used for assignments without a DateTo",
    )
    config = AppConfig(
        date=DateConfig(two_digit_year_pivot=int(pivot)),
        loader=LoaderConfig(delimiter=delimiter),
    )
    if as_of_date == datetime.now().date():
        as_of = datetime.now()
    else:
        as_of = datetime.combine(as_of_date, time())
    return config, as_of

# About section in the sidebar
def show_about():
    st.sidebar.markdown("---")
    st.sidebar.header("About")
    st.sidebar.info("""
    Computes, for every pair of employees who shared a project, the number of
    days their assignments overlapped.
    * Dates may use any of the supported formats (ISO, US, European, `01-Nov-23`, ...)
    * An empty or `NULL` end date means the assignment is still ongoing
    * Each upload is analysed independently; nothing is stored
    """)

# Render one analysis into the result tabs
def show_report(report, results_tab, chart_tab):
    with results_tab:
        if not report.ok:
            st.error(report.error)
            return

        st.info(report.message)
        if report.overlaps:
            st.subheader("All Common Project Overlaps")
            st.dataframe(
                overlaps_to_dataframe(report.overlaps),
                use_container_width=True,
                hide_index=True,
            )

            buffer = io.BytesIO()
            export_overlaps_to_excel(buffer, report.overlaps, report.totals)
            st.download_button(
                label="Download Excel report",
                data=buffer.getvalue(),
                file_name="pair_overlaps.xlsx",
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            )

    with chart_tab:
        if report.totals:
            top = report.totals[0]
            st.metric(
                f"Longest pair: {top.employee_a} & {top.employee_b}",
                f"{top.total_overlap_days} days",
            )
            st.pyplot(plot_pair_totals(report.totals))
            st.dataframe(
                pair_totals_to_dataframe(report.totals),
                use_container_width=True,
                hide_index=True,
            )
        else:
            st.write("No overlapping pairs.")

# Main Streamlit app
def main():
    st.title("Employee Pair Finder 📊")
    st.markdown("""
    Upload your CSV file to view all employee pairs who worked together on a common project.
    The file needs the columns `EmpID`, `ProjectID`, `DateFrom` and `DateTo`.
    """)

    try:
        config, as_of = sidebar_config()
    except ConfigError as e:
        st.error(f"Invalid settings: {e}")
        return

    show_about()

    uploaded = st.file_uploader("CSV File", type=["csv", "txt"])

    if st.button("Analyze", type="primary", disabled=uploaded is None):
        results_tab, chart_tab, log_tab = st.tabs(["Results", "Top Pairs", "Logs"])
        capture_logs(log_tab.empty())

        report = analyze_upload(uploaded.getvalue(), config, as_of)
        show_report(report, results_tab, chart_tab)

if __name__ == "__main__":
    main()
