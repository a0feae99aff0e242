"""
Memory Allocation Visualizer — Fixed Partitions

Interactive simulation of contiguous memory allocation over fixed-size
blocks. Processes are placed with one of four placement strategies:
    - First Fit
    - Best Fit
    - Worst Fit
    - Next Fit

Built with Streamlit for the web interface and Plotly for visualizations.
The allocation logic lives in engine.py; this file only parses input,
calls the engine and renders its state.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import logging

import plotly.graph_objects as go  # Interactive plotting library
import streamlit as st             # Web application framework

from config import load_config
from engine import AllocationManager
from errors import SimulatorError
from strategies import Strategy
from utils import UNPARTITIONED_COLOR, explain, get_color, parse_int, parse_sizes

config = load_config()
logging.basicConfig(
    level=config.logging_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Configure the Streamlit page
st.set_page_config(page_title="Memory Allocation Visualizer", layout="wide")
st.title("Memory Allocation Visualizer — Fixed Partitions")

# -----------------------------------------------------------------------------
# SESSION STATE - Allocation Manager Persistence
# -----------------------------------------------------------------------------

# Initialize manager in session state (persists across Streamlit reruns)
if "manager" not in st.session_state:
    st.session_state.manager = AllocationManager(event_log_limit=config.event_log_limit)

manager: AllocationManager = st.session_state.manager


def _run(action, success_message=None):
    """Call into the engine and surface errors as messages."""
    try:
        result = action()
    except SimulatorError as e:
        st.sidebar.error(str(e))
        return None
    if success_message:
        st.sidebar.success(success_message)
    return result


# =============================================================================
# SIDEBAR - Memory Setup
# =============================================================================

st.sidebar.header("Memory Setup")

memory_size_text = st.sidebar.text_input("Memory size (KB)", value=str(config.memory_size_kb))

if st.sidebar.button("Initialize Memory"):
    capacity = parse_int(memory_size_text)
    _run(
        lambda: manager.initialize_memory(capacity),
        f"Memory initialized with size {capacity} KB",
    )

block_sizes_text = st.sidebar.text_input(
    "Block sizes (comma separated KB)",
    value=config.block_sizes,
)

if st.sidebar.button("Create Blocks"):
    if manager.capacity <= 0:
        st.sidebar.error("Please initialize memory first")
    else:
        sizes = parse_sizes(block_sizes_text)
        _run(
            lambda: manager.define_partition(sizes),
            f"Created {len(sizes)} blocks",
        )

st.sidebar.markdown("---")

# =============================================================================
# SIDEBAR - Process Allocation
# =============================================================================

st.sidebar.header("Allocate Process")

process_id = st.sidebar.text_input("Process ID", value="P1")
process_size_text = st.sidebar.text_input("Process size (KB)", value="10")

strategies = list(Strategy)
strategy = st.sidebar.selectbox(
    "Algorithm",
    options=strategies,
    index=strategies.index(config.strategy),
    format_func=lambda s: s.label,
)

if st.sidebar.button("Allocate"):
    result = _run(lambda: manager.allocate(process_id, parse_int(process_size_text), strategy))
    if result is not None:
        st.sidebar.success(
            f"{process_id.strip()} -> Block {result.block_index} "
            f"(fragmentation {result.fragmentation} KB)"
        )

if st.sidebar.button("Clear All"):
    manager.reset()
    st.sidebar.success("All blocks and processes cleared")

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([2, 1])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Memory Visualization and Tables
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Memory")

    if manager.capacity <= 0:
        st.write("Memory not initialized")
    elif not manager.blocks:
        st.write(f"{manager.capacity} KB of memory, no blocks defined")
    else:
        # Stacked horizontal bar, one segment per block, scaled to capacity
        fig = go.Figure()
        for block in manager.blocks:
            if block.allocated:
                label = f"{block.occupant_id} ({block.size} KB - Frag: {block.fragmentation} KB)"
            else:
                label = f"Free ({block.size} KB)"
            fig.add_trace(go.Bar(
                x=[block.size],
                y=["Memory"],
                orientation="h",
                name=f"Block {block.index}",
                text=label,
                hovertext=f"Block {block.index}: {label}",
                hoverinfo="text",
                marker_color=get_color(block.allocated, block.occupant_id),
                marker_line=dict(color="#333333", width=1),
            ))

        unpartitioned = manager.store.unpartitioned_size
        if unpartitioned:
            fig.add_trace(go.Bar(
                x=[unpartitioned],
                y=["Memory"],
                orientation="h",
                name="Unpartitioned",
                text=f"Unpartitioned ({unpartitioned} KB)",
                hoverinfo="text",
                marker_color=UNPARTITIONED_COLOR,
            ))

        fig.update_layout(
            barmode="stack",
            height=160,
            showlegend=False,
            xaxis=dict(range=[0, manager.capacity], title="KB"),
            yaxis=dict(showticklabels=False),
            margin=dict(l=10, r=10, t=10, b=40),
        )
        st.plotly_chart(fig, use_container_width=True)

        st.subheader("Blocks")
        st.table(manager.block_table())

    # ----- Process Table with remove buttons -----
    st.subheader("Processes")
    rows = manager.process_table()
    if not rows:
        st.write("No processes allocated")
    else:
        header = st.columns([2, 2, 2, 3, 2])
        for cell, title in zip(header, ["Process", "Size", "Block", "Algorithm", ""]):
            cell.markdown(f"**{title}**")
        for row in rows:
            cells = st.columns([2, 2, 2, 3, 2])
            cells[0].write(row["process"])
            cells[1].write(f"{row['size_kb']} KB")
            cells[2].write(f"Block {row['block']}")
            cells[3].write(row["algorithm"])
            if cells[4].button("Remove", key=f"remove-{row['process']}"):
                manager.deallocate(row["process"])
                st.rerun()

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Metrics, Explanation and Event Log
# -----------------------------------------------------------------------------

with col2:
    st.subheader("Statistics")
    metrics = manager.get_fragmentation_metrics()
    st.metric("Internal Fragmentation", f"{metrics['total_internal']} KB")
    st.metric("Free Block Memory", f"{metrics['free']} KB")
    st.metric("Unpartitioned Memory", f"{metrics['unpartitioned']} KB")
    st.metric("External Fragmentation", metrics["external"])
    st.metric("Utilization", metrics["utilization"])

    st.subheader("Algorithm")
    st.markdown(explain(strategy))

    st.subheader("Event Log")
    for ev in reversed(manager.event_log):
        st.write(ev)
