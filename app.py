import json

import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from everest_meter.altitude import (
    DEAD_ZONE_M,
    EVEREST_SUMMIT_M,
    altitude_ticks,
    marker_fraction,
    oxygen_timeline,
)
from everest_meter.defaults import DEFAULTS, UI_DEFAULTS
from everest_meter.formatting import fmt_altitude, fmt_money, fmt_percent, fmt_time
from everest_meter.input_metadata import INPUT_GUIDANCE, advisory_warnings, help_with_guidance
from everest_meter.notes import notes_frame
from everest_meter.runtime_logging import (
    append_runtime_event,
    install_global_exception_logging,
    runtime_events_frame,
    runtime_log_path,
)
from everest_meter.schema import EDITABLE_FIELDS
from everest_meter.session import MeetingSession, MeetingSnapshot


install_global_exception_logging()


SESSION_KEY = "meeting_session"

PARAM_SETTERS = {
    "onsite_people": "set_onsite_people",
    "remote_people": "set_remote_people",
    "room_area_m2": "set_room_area",
    "o2_consumption_lpm": "set_o2_consumption_rate",
    "hourly_cost_per_person": "set_hourly_cost_per_person",
    "currency_code": "set_currency",
}

# Mountain outline: x in [0, 200], y as a share of the summit altitude.
MOUNTAIN_X = [0, 60, 95, 130, 160, 200, 200, 0]
MOUNTAIN_Y = [0.0, 0.32, 0.21, 0.39, 0.32, 0.47, 0.0, 0.0]


def _session() -> MeetingSession:
    return st.session_state[SESSION_KEY]


def _stable_json(value) -> str:
    return json.dumps(value, sort_keys=True, default=str)


def _on_param_change(key: str) -> None:
    setter = getattr(_session(), PARAM_SETTERS[key])
    # Write the coerced value back so the widget shows what the model uses.
    st.session_state[key] = setter(st.session_state.get(key))


def _on_toggle_running() -> None:
    _session().toggle_running()


def _on_reset() -> None:
    _session().reset()


def _on_add_note() -> None:
    note = _session().add_note(st.session_state.get("note_topic"), st.session_state.get("note_text"))
    if note is not None:
        st.session_state["note_text"] = ""


def _on_clear_notes() -> None:
    _session().clear_notes()


def _everest_figure(altitude_m: float, percent: float) -> go.Figure:
    fig = go.Figure()
    fig.add_hrect(
        y0=DEAD_ZONE_M,
        y1=EVEREST_SUMMIT_M,
        fillcolor="rgba(254, 202, 202, 0.7)",
        line_width=0,
        annotation_text=f"Dead zone ≥ {int(DEAD_ZONE_M)} m",
        annotation_position="top left",
    )
    fig.add_trace(
        go.Scatter(
            x=MOUNTAIN_X,
            y=[v * EVEREST_SUMMIT_M for v in MOUNTAIN_Y],
            fill="toself",
            fillcolor="#94a3b8",
            line={"color": "#94a3b8"},
            hoverinfo="skip",
            name="Mountain",
        )
    )
    marker_y = marker_fraction(altitude_m) * EVEREST_SUMMIT_M
    fig.add_trace(
        go.Scatter(
            x=[80, 80],
            y=[0, marker_y],
            mode="lines",
            line={"color": "#0f172a", "dash": "dot"},
            hoverinfo="skip",
            name="Climb",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[80],
            y=[marker_y],
            mode="markers+text",
            marker={"size": 12, "color": "#0f172a"},
            text=[fmt_altitude(altitude_m)],
            textposition="middle right",
            name="Room",
        )
    )
    ticks = altitude_ticks(10)
    fig.update_layout(
        title=f"Everest Oxygen Comparator ({fmt_percent(percent, 1)} O₂)",
        showlegend=False,
        height=460,
        margin={"l": 10, "r": 10, "t": 50, "b": 10},
        xaxis={"visible": False, "range": [0, 200]},
        yaxis={
            "range": [0, EVEREST_SUMMIT_M],
            "tickvals": ticks,
            "ticktext": [f"{t} m" for t in ticks],
        },
        plot_bgcolor="#e0f2fe",
    )
    return fig


def _render_cost(snapshot: MeetingSnapshot) -> None:
    st.subheader("Live Cost")
    c1, c2 = st.columns(2)
    c1.metric("Elapsed", fmt_time(snapshot.elapsed_seconds))
    c2.metric("Cost so far", fmt_money(snapshot.live_cost, snapshot.currency_code))
    st.caption(
        f"{snapshot.participants} × {fmt_money(snapshot.hourly_cost_per_person, snapshot.currency_code)}/h"
        f" = {fmt_money(snapshot.hourly_burn, snapshot.currency_code)}/h"
    )


def _render_oxygen(snapshot: MeetingSnapshot) -> None:
    st.subheader("Room Oxygen (toy model)")
    o1, o2 = st.columns(2)
    o1.metric("Current O₂", fmt_percent(snapshot.oxygen_percent))
    o2.metric("Equiv. altitude", fmt_altitude(snapshot.equivalent_altitude_m))
    o3, o4 = st.columns(2)
    o3.metric("O₂ consumed", f"{snapshot.consumed_liters:,.0f} L")
    o4.metric("Room volume", f"{snapshot.room_volume_m3:,.1f} m³")
    if snapshot.in_dead_zone:
        st.error("Room air now matches the dead zone. Open a window.")
    st.caption("Illustrative only. Real rooms exchange air; use this as a playful awareness tool.")


st.set_page_config(page_title="Everest Meeting Meter", layout="wide")
st.title("Everest Meeting Meter")
st.caption("Track live meeting cost, take notes, and visualize room oxygen vs. Everest altitude, including the dead zone.")
st.markdown(
    """
    <style>
    div[data-testid="stMetricValue"] {
        font-variant-numeric: tabular-nums;
    }
    div[data-baseweb="input"] input[type="number"] {
        text-align: right;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

for k, v in DEFAULTS.items():
    if k in EDITABLE_FIELDS:
        st.session_state.setdefault(k, v)
for k, v in UI_DEFAULTS.items():
    st.session_state.setdefault(k, v)
st.session_state.setdefault("_input_warning_log_signature", "")
if SESSION_KEY not in st.session_state:
    st.session_state[SESSION_KEY] = MeetingSession()
    st.session_state[SESSION_KEY].apply_parameters({k: st.session_state[k] for k in EDITABLE_FIELDS})

session = _session()
snapshot = session.snapshot()

b1, b2, b3 = st.columns(3)
b1.metric("Participants", snapshot.participants)
b2.metric("Onsite", snapshot.onsite_people)
b3.metric("Remote", snapshot.remote_people)

setup_col, notes_col = st.columns(2)

with setup_col:
    st.subheader("Setup")
    st.number_input(
        "People onsite",
        min_value=0,
        step=1,
        key="onsite_people",
        on_change=_on_param_change,
        args=("onsite_people",),
        help=help_with_guidance("onsite_people", "People in the room."),
    )
    st.number_input(
        "People remote",
        min_value=0,
        step=1,
        key="remote_people",
        on_change=_on_param_change,
        args=("remote_people",),
        help=help_with_guidance("remote_people", "People joining remotely."),
    )
    a1, a2 = st.columns(2)
    a1.number_input(
        "Room area (m²)",
        min_value=0.0,
        step=1.0,
        key="room_area_m2",
        on_change=_on_param_change,
        args=("room_area_m2",),
        help=help_with_guidance("room_area_m2", "Floor area of the room."),
    )
    a2.number_input(
        "O₂ L/min per person",
        min_value=float(INPUT_GUIDANCE["o2_consumption_lpm"]["min"]),
        step=0.1,
        key="o2_consumption_lpm",
        on_change=_on_param_change,
        args=("o2_consumption_lpm",),
        help=help_with_guidance("o2_consumption_lpm", "Pure oxygen consumed per onsite person."),
    )
    h1, h2 = st.columns(2)
    h1.number_input(
        "Hourly cost per person",
        min_value=0.0,
        step=5.0,
        key="hourly_cost_per_person",
        on_change=_on_param_change,
        args=("hourly_cost_per_person",),
        help=help_with_guidance("hourly_cost_per_person", "Cost of one attendee per hour."),
    )
    h2.text_input(
        "Currency",
        key="currency_code",
        on_change=_on_param_change,
        args=("currency_code",),
        help="Currency code used when formatting the cost, e.g. CHF or EUR.",
    )

    t1, t2 = st.columns(2)
    t1.button(snapshot.toggle_label, key="toggle_running", type="primary", on_click=_on_toggle_running)
    t2.button("Reset", key="reset_clock", on_click=_on_reset)

    input_warnings = advisory_warnings(session.parameters.to_dict())
    input_warning_signature = _stable_json(input_warnings)
    if input_warnings and st.session_state.get("_input_warning_log_signature") != input_warning_signature:
        append_runtime_event(
            level="WARNING",
            event="input_warnings",
            message=f"{len(input_warnings)} input warning(s) for the current setup.",
            context={"warnings": input_warnings},
        )
        st.session_state["_input_warning_log_signature"] = input_warning_signature
    elif not input_warnings:
        st.session_state["_input_warning_log_signature"] = ""
    if input_warnings:
        with st.expander(f"[!] Input Warnings ({len(input_warnings)})", expanded=False):
            st.caption("The meter keeps running with the values shown.")
            for warning in input_warnings:
                st.write(f"- {warning}")


with notes_col:
    head_l, head_r = st.columns([3, 1])
    head_l.subheader("Topics & Notes")
    head_r.markdown(":green-badge[Recording]" if snapshot.running else ":gray-badge[Idle]")
    st.text_input("Topic", key="note_topic", placeholder="e.g., Roadmap Q4")
    st.text_area("Note", key="note_text", placeholder="Type quick notes and decisions...", height=110)
    n1, n2 = st.columns(2)
    n1.button("Add note", key="add_note", on_click=_on_add_note)
    n2.button("Clear", key="clear_notes", on_click=_on_clear_notes)
    st.toggle("Table view", key="show_notes_table")

    notes = session.notes.notes
    if not notes:
        st.caption("No notes yet. Add your first decision or action item.")
    elif st.session_state["show_notes_table"]:
        st.dataframe(notes_frame(notes), hide_index=True, width="stretch")
    else:
        for note in notes:
            with st.container(border=True):
                nl, nr = st.columns([3, 1])
                nl.markdown(f"**{note.topic}**")
                nr.caption(f"@ {fmt_time(note.timestamp_seconds)}")
                if note.text:
                    st.write(note.text)


@st.fragment(run_every=session.tick_interval)
def _live_panel() -> None:
    session.tick()
    live = session.snapshot()
    cost_col, oxygen_col, everest_col = st.columns(3)
    with cost_col:
        _render_cost(live)
    with oxygen_col:
        _render_oxygen(live)
    with everest_col:
        st.plotly_chart(_everest_figure(live.equivalent_altitude_m, live.oxygen_percent), width="stretch")


_live_panel()

st.subheader("Depletion Projection")
st.slider(
    "Projection horizon (minutes)",
    min_value=10,
    max_value=480,
    step=10,
    key="timeline_horizon_minutes",
    help="Length of the depletion projection for the current setup.",
)
p = session.parameters
timeline = oxygen_timeline(
    onsite_people=p.onsite_people,
    room_area_m2=p.room_area_m2,
    ceiling_height_m=p.ceiling_height_m,
    o2_consumption_lpm=p.o2_consumption_lpm,
    horizon_seconds=float(st.session_state["timeline_horizon_minutes"]) * 60.0,
)
pc1, pc2 = st.columns(2)
pc1.plotly_chart(px.line(timeline, x="Elapsed Minutes", y="Oxygen %", title="Projected Room Oxygen"), width="stretch")
pc2.plotly_chart(
    px.line(timeline, x="Elapsed Minutes", y="Equivalent Altitude (m)", title="Projected Equivalent Altitude"),
    width="stretch",
)

st.caption("Tip: Only onsite people affect the room oxygen. Everyone counts toward cost.")
st.caption("Dead zone shown for fun awareness. Please ventilate your room in real life.")

with st.expander("Diagnostics", expanded=False):
    st.caption(f"Runtime log: {runtime_log_path()}")
    st.number_input("Events to show", min_value=10, max_value=500, step=10, key="runtime_log_limit")
    st.dataframe(runtime_events_frame(limit=int(st.session_state["runtime_log_limit"])), hide_index=True, width="stretch")
