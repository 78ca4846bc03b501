import io
import logging
import os
import tkinter as tk
from tkinter import filedialog

import streamlit as st

from sbomdiff.cli import build_results, load_config
from sbomdiff.errors import CompareError
from sbomdiff.export_excel import write_workbook


st.set_page_config(page_title="sbomdiff UI", layout="wide")


def pick_directory(default_path: str) -> str:
    root = tk.Tk()
    root.withdraw()
    root.wm_attributes("-topmost", 1)
    selected = filedialog.askdirectory(initialdir=default_path or os.getcwd())
    root.destroy()
    return selected or default_path


DEFAULTS = {
    "documents_text": "",
    "config_path": "./config.yaml",
    "output_path": "./output/compare.xlsx",
    "results_ready": False,
    "report": None,
    "log_output": "",
}

for key, default in DEFAULTS.items():
    st.session_state.setdefault(key, default)


st.title("sbomdiff - SPDX Document Compare")
st.write("Compare several SPDX documents side by side without using the CLI.")


with st.sidebar:
    st.header("Inputs")

    def _add_folder() -> None:
        folder = pick_directory("")
        if folder:
            current = st.session_state["documents_text"].strip()
            st.session_state["documents_text"] = f"{current}\n{folder}".strip()

    st.text_area("SPDX documents or folders (one per line)", key="documents_text", height=160)
    st.button("Add folder", on_click=_add_folder, use_container_width=True)
    st.text_input("Config YAML", key="config_path")
    st.text_input("Output XLSX", key="output_path")
    log_level = st.selectbox("Log level", options=["INFO", "DEBUG", "WARNING", "ERROR"], index=0)


st.subheader("Run")
if st.button("Run Compare"):
    inputs = [line.strip() for line in st.session_state["documents_text"].splitlines() if line.strip()]
    with st.spinner("Comparing documents..."):
        handler = logging.StreamHandler(stream=io.StringIO())
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root_logger = logging.getLogger()
        root_logger.addHandler(handler)
        root_logger.setLevel(getattr(logging, log_level, logging.INFO))
        try:
            config = load_config(st.session_state["config_path"])
            st.session_state["report"] = build_results(config, inputs)
            st.session_state["results_ready"] = True
            st.success("Finished comparing. Review results below or export to Excel.")
        except CompareError as exc:
            st.session_state["results_ready"] = False
            st.error(str(exc))
        finally:
            handler.flush()
            st.session_state["log_output"] = handler.stream.getvalue()
            root_logger.removeHandler(handler)

st.subheader("Console Output")
st.text_area("Logs", value=st.session_state.get("log_output", ""), height=200)

if st.session_state.get("results_ready"):
    report = st.session_state["report"]
    st.subheader("Preview Results")
    st.dataframe(
        [
            {
                "Category": result.category.sheet_title,
                "Rows": len(result.rows),
                "Equal": result.equal_count,
                "Different": result.different_count,
                "Error": result.error or "",
            }
            for result in report.categories
        ],
        use_container_width=True,
    )

    for result in report.categories:
        if not result.rows:
            continue
        with st.expander(result.category.sheet_title):
            category = result.category
            preview = []
            for row in result.rows:
                keys = dict(zip(category.key_headers, category.key_values(row.key)))
                if category.properties:
                    for prop in category.properties:
                        entry = dict(keys, Property=prop.title)
                        entry["Same/Diff"] = "Equal" if prop.agrees(row.values) else "Different"
                        for name, record in zip(report.doc_names, row.values):
                            entry[name] = category.absent_value if record is None else prop.render(record)
                        preview.append(entry)
                    continue
                entry = dict(keys)
                entry["Same/Diff"] = "Equal" if row.equal else "Different"
                for name, record in zip(report.doc_names, row.values):
                    entry[name] = category.absent_value if record is None else category.render(record)
                preview.append(entry)
            st.dataframe(preview, use_container_width=True, height=300)

    if st.button("Export to Excel"):
        try:
            output_path = st.session_state["output_path"]
            os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
            write_workbook(output_path, report, load_config(st.session_state["config_path"]))
            st.success(f"Exported to {output_path}")
        except Exception as exc:
            st.exception(exc)

st.markdown(
    """
### Notes
- The UI wraps the same CLI logic, so configuration changes in `config.yaml` still apply.
- Folders are searched recursively for `.json`, `.yaml` and `.yml` SPDX documents.
- Documents are named after their file names in the report.
- Results are held in memory for preview; export writes the Excel file on demand.
"""
)
