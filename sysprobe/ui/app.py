"""Streamlit dashboard for the container resource probe."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from sysprobe.config import get_config
from sysprobe.engine.resolver import ResourceResolver, create_resolver
from sysprobe.errors import SysprobeError
from sysprobe.net.connectivity import check_connectivity

st.set_page_config(page_title="sysprobe", layout="wide")
st.title("Container Resource Probe")


@st.cache_resource
def _resolver() -> ResourceResolver:
    return create_resolver(get_config())


command_only = st.toggle("Command-based only", value=False)
st.button("Refresh")

try:
    resolver = _resolver()
    if command_only:
        snapshot = resolver.resolve_snapshot_command_only()
    else:
        snapshot = resolver.resolve_snapshot()
except SysprobeError as exc:
    st.error(f"Resource snapshot unavailable: {exc}")
else:
    st.caption(
        f"Method: {snapshot.method.value} · fallback used: {snapshot.used_fallback} "
        f"· CPU source: {snapshot.cpu_source} · memory source: {snapshot.memory_source}"
    )
    cpu_col, memory_col = st.columns(2)
    cpu_col.metric("CPU usage", f"{snapshot.cpu.usage_percent:.1f}%")
    cpu_col.metric(
        "CPU cores used",
        f"{snapshot.cpu.used_cores:.2f} / {snapshot.cpu.limit_cores:.2f}",
    )
    memory_col.metric("Memory usage", f"{snapshot.memory.usage_percent:.1f}%")
    memory_col.metric(
        "Memory used",
        f"{snapshot.memory.usage_mb:.0f} MB / {snapshot.memory.limit_mb:.0f} MB",
    )

    table = pd.DataFrame(
        [
            {"Metric": "Load average", "Value": snapshot.cpu.load_average or "n/a"},
            {"Metric": "Available cores", "Value": f"{snapshot.cpu.available_cores:.2f}"},
            {"Metric": "Available memory (MB)", "Value": f"{snapshot.memory.available_mb:.1f}"},
            {"Metric": "Free (bytes)", "Value": str(snapshot.memory.free_bytes)},
            {"Metric": "Buffers (bytes)", "Value": str(snapshot.memory.buffer_bytes)},
            {"Metric": "Cached (bytes)", "Value": str(snapshot.memory.cached_bytes)},
        ]
    )
    st.dataframe(table, use_container_width=True, hide_index=True)

st.subheader("Connectivity")
domain = st.text_input("Domain", value="")
port = st.text_input("Port", value="80")
timeout = st.number_input(
    "Timeout (seconds)", min_value=1, value=get_config().connect_timeout, step=1
)

if st.button("Check connectivity"):
    if not domain:
        st.warning("Please enter a domain to check.")
    else:
        report = check_connectivity(domain, port, int(timeout))
        st.json(report.to_dict())
