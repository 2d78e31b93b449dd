from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import plotly.express as px
import streamlit as st

from affiliate_calc import (
    APP_DESCRIPTION,
    APP_NAME,
    APP_VERSION,
    AccessDecision,
    AccessGate,
    AppSettings,
    CalculationMode,
    CalculationResult,
    CalculatorSession,
    MessageLevel,
    ServiceMessage,
    UsageTracker,
    WhopClient,
    build_insights,
    build_monthly_projection,
    build_results_table,
    commission_split,
    format_currency,
    inputs_from_form,
    setup_logging,
)
from affiliate_calc.config import CALCULATION_EVENT, DEFAULT_CONVERSION_RATE, USER_TOKEN_HEADER
from affiliate_calc.messages import MISSING_REQUIRED_FIELDS, MISSING_TARGET_FIELDS


# ------------------ Page config ------------------ #
st.set_page_config(page_title=APP_NAME, page_icon="🧮", layout="centered")


# ------------------ Shared resources ------------------ #
@st.cache_resource
def _settings() -> AppSettings:
    settings = AppSettings.load()
    setup_logging(settings.log_level)
    return settings


@st.cache_resource
def _tracker() -> UsageTracker:
    settings = _settings()
    return UsageTracker(enabled=settings.analytics_enabled, tracking_id=settings.analytics_id)


@st.cache_resource
def _access_gate() -> AccessGate:
    settings = _settings()
    return AccessGate(WhopClient(settings), settings, tracker=_tracker())


def _calc_session() -> CalculatorSession:
    if "calc_session" not in st.session_state:
        st.session_state["calc_session"] = CalculatorSession()
    return st.session_state["calc_session"]


# ------------------ Utilities ------------------ #
def _hex_to_rgb(hexstr: str):
    h = hexstr.lstrip("#")
    if len(h) != 6:
        return None
    try:
        return tuple(int(h[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return None


def _luma(rgb):
    r, g, b = rgb
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def _theme_is_dark(force: bool | None = None) -> bool:
    if force is not None:
        return force

    base = st.get_option("theme.base")
    if isinstance(base, str):
        return base.lower() == "dark"

    bg = st.get_option("theme.backgroundColor")
    if isinstance(bg, str):
        rgb = _hex_to_rgb(bg)
        if rgb:
            return _luma(rgb) < 128

    return False


def _display_messages(messages: Sequence[ServiceMessage]) -> None:
    for message in messages:
        if message.level == MessageLevel.ERROR:
            st.error(message.text)
        elif message.level == MessageLevel.WARNING:
            st.warning(message.text)
        else:
            st.info(message.text)


def _user_token() -> Optional[str]:
    try:
        return st.context.headers.get(USER_TOKEN_HEADER)
    except AttributeError:
        return None


def _form_inputs():
    state = st.session_state
    return inputs_from_form(
        item_price=state.get("item_price"),
        commission_percentage=state.get("commission"),
        quantity=state.get("quantity"),
        monthly_sales_count=state.get("monthly_sales"),
        conversion_rate_percentage=state.get("conversion_rate"),
        target_income=state.get("target_income"),
    )


# ------------------ Callbacks ------------------ #
def _recalculate_forward() -> None:
    session = _calc_session()
    ok = session.apply(_form_inputs(), CalculationMode.FORWARD)
    st.session_state["calc_prompt"] = None if ok else MISSING_REQUIRED_FIELDS


def _calculate_items_needed() -> None:
    session = _calc_session()
    ok = session.apply(_form_inputs(), CalculationMode.INVERSE)
    st.session_state["calc_prompt"] = None if ok else MISSING_TARGET_FIELDS
    if ok:
        _tracker().record(
            CALCULATION_EVENT,
            {"mode": CalculationMode.INVERSE.value, "itemsNeeded": session.result.items_needed},
        )


def _reset_calculator() -> None:
    _calc_session().reset()
    for key in ("item_price", "commission", "quantity", "monthly_sales", "target_income"):
        st.session_state[key] = ""
    st.session_state["conversion_rate"] = f"{DEFAULT_CONVERSION_RATE:g}"
    st.session_state["calc_prompt"] = None


# ------------------ Screens ------------------ #
def _resolve_access() -> AccessDecision:
    decision = st.session_state.get("access_decision")
    if decision is None:
        with st.spinner("Loading your calculator..."):
            decision = _access_gate().evaluate(_user_token())
        if decision.cacheable:
            st.session_state["access_decision"] = decision
    return decision


def _render_access_denied(decision: AccessDecision) -> None:
    st.title("🔒 Access Required")
    _display_messages(decision.messages)
    st.write(
        f"You need to have access to this app through Whop to use the {APP_NAME}."
    )
    if st.button("Try Again", type="primary"):
        st.session_state.pop("access_decision", None)
        st.rerun()


def _render_results(result: CalculationResult, mode: CalculationMode) -> None:
    st.subheader("📊 Calculation Results")
    cards = [
        ("Per Item Earnings", format_currency(result.single_item_earning)),
        (
            "Target Income" if mode == CalculationMode.INVERSE else "Total Earnings",
            format_currency(result.total_earnings),
        ),
    ]
    if result.monthly_earnings > 0:
        cards.append(("Monthly Projection", format_currency(result.monthly_earnings)))
    if result.yearly_earnings > 0:
        cards.append(("Yearly Projection", format_currency(result.yearly_earnings)))
    if result.items_needed > 0:
        cards.append(("Items Needed", f"{result.items_needed:,}"))

    for col, (label, value) in zip(st.columns(len(cards)), cards):
        col.metric(label, value)

    insights = build_insights(result)
    if insights:
        st.markdown("**Insights**")
        st.markdown("\n".join(f"- {line}" for line in insights))

    df_results = build_results_table(result)
    st.download_button(
        "Download results (.csv)",
        data=df_results.to_csv(index=False).encode("utf-8"),
        file_name="affiliate_results.csv",
        mime="text/csv",
    )


def _render_projection_chart(result: CalculationResult) -> None:
    df_proj = build_monthly_projection(result, start=date.today())
    if df_proj.empty:
        return

    fig = px.line(
        df_proj,
        x="Month",
        y="Cumulative (USD)",
        title="Cumulative Earnings Projection (12 months)",
        markers=True,
    )
    fig.update_traces(
        customdata=df_proj["Earnings (USD)"],
        hovertemplate="<b>%{x|%b %Y}</b>"
        "<br>Cumulative: $%{y:,.2f}"
        "<br>This month: $%{customdata:,.2f}"
        "<extra></extra>",
    )
    fig.update_layout(xaxis_title="", yaxis_title="USD", hovermode="x unified")
    st.plotly_chart(fig, use_container_width=True)


def _render_split_chart(price: Optional[float], commission: Optional[float], force_dark: bool) -> None:
    if not price or not commission or price <= 0 or commission <= 0:
        return

    split = commission_split(price, commission)
    is_dark = _theme_is_dark(force=True if force_dark else None)
    txt_col = "white" if is_dark else "black"
    edge_col = "white" if is_dark else "black"

    plt.rcParams["savefig.transparent"] = True
    fig, ax = plt.subplots(facecolor="none")
    ax.set_facecolor("none")

    _, texts, autotexts = ax.pie(
        [split.affiliate_usd, split.merchant_usd],
        labels=["Your commission", "Merchant"],
        autopct="%1.1f%%",
        startangle=90,
        counterclock=False,
        colors=["#8b5cf6", "#3b82f6"],
        wedgeprops={"edgecolor": edge_col, "linewidth": 1.0},
    )
    for t in [*texts, *autotexts]:
        t.set_color(txt_col)
        t.set_fontsize(11)
    ax.axis("equal")

    st.subheader("🍰 Where Each Sale Goes")
    st.pyplot(fig, transparent=True)
    plt.close(fig)


def _render_how_to_use() -> None:
    with st.expander("How to Use"):
        col1, col2 = st.columns(2)
        with col1:
            st.markdown(
                "**Earnings Calculator**\n"
                "- Enter the price of the item you're promoting\n"
                "- Enter your affiliate commission percentage\n"
                "- Enter how many items you've sold (optional)\n"
                "- Enter monthly sales for projections (optional)\n"
                "- See your per-item, total, monthly, and yearly earnings"
            )
        with col2:
            st.markdown(
                "**Target Income Calculator**\n"
                "- Enter your target income goal\n"
                "- Set your conversion rate percentage\n"
                "- See how many items you need to sell\n"
                "- Get insights on visitors needed per sale"
            )
        st.info(
            "💡 Use realistic conversion rates (1-5% is typical for most niches) "
            "and track your actual results to improve your projections."
        )


def main() -> None:
    settings = _settings()

    decision = _resolve_access()
    if not decision.granted:
        _render_access_denied(decision)
        st.stop()

    # ------------------ Sidebar ------------------ #
    force_dark_toggle = st.sidebar.toggle(
        "Force white chart labels",
        value=False,
        help="Use if the pie chart labels are hard to read in dark mode.",
    )
    st.sidebar.caption(f"{APP_NAME} v{APP_VERSION} · {settings.environment}")

    # ------------------ Header ------------------ #
    st.title(f"🧮 {APP_NAME}")
    st.caption(APP_DESCRIPTION)
    if decision.user is not None:
        st.caption(f"Welcome, {decision.user.display_name}!")
    _display_messages(decision.messages)

    # ------------------ Inputs ------------------ #
    col_price, col_pct = st.columns(2)
    with col_price:
        st.text_input(
            "Item Price ($)",
            key="item_price",
            placeholder="Enter item price",
            on_change=_recalculate_forward,
        )
    with col_pct:
        st.text_input(
            "Affiliate Percentage (%)",
            key="commission",
            placeholder="Enter affiliate percentage",
            on_change=_recalculate_forward,
        )
    if "conversion_rate" not in st.session_state:
        st.session_state["conversion_rate"] = f"{DEFAULT_CONVERSION_RATE:g}"
    st.text_input(
        "Conversion Rate (%)",
        key="conversion_rate",
        help="Share of visitors who buy; used for the visitors-per-sale insight.",
        on_change=_recalculate_forward,
    )

    tab_labels = []
    if settings.earnings_calculator_enabled:
        tab_labels.append("🧮 Earnings Calculator")
    if settings.reverse_calculator_enabled:
        tab_labels.append("🎯 Target Income Calculator")

    if tab_labels:
        tabs = dict(zip(tab_labels, st.tabs(tab_labels)))

        if "🧮 Earnings Calculator" in tabs:
            with tabs["🧮 Earnings Calculator"]:
                col_qty, col_monthly = st.columns(2)
                with col_qty:
                    st.text_input(
                        "Quantity Sold",
                        key="quantity",
                        placeholder="Enter quantity (optional)",
                        on_change=_recalculate_forward,
                    )
                with col_monthly:
                    st.text_input(
                        "Monthly Sales (for projections)",
                        key="monthly_sales",
                        placeholder="Enter monthly sales",
                        on_change=_recalculate_forward,
                    )

        if "🎯 Target Income Calculator" in tabs:
            with tabs["🎯 Target Income Calculator"]:
                st.text_input(
                    "Target Income ($)",
                    key="target_income",
                    placeholder="Enter target income",
                )
                st.button(
                    "Calculate Items Needed",
                    type="primary",
                    use_container_width=True,
                    on_click=_calculate_items_needed,
                )

    # ------------------ Results ------------------ #
    session = _calc_session()
    prompt = st.session_state.get("calc_prompt")
    if prompt is not None:
        _display_messages([prompt])

    st.divider()
    if session.result is None:
        if prompt is None:
            _display_messages([MISSING_REQUIRED_FIELDS])
    else:
        _render_results(session.result, session.mode or CalculationMode.FORWARD)
        _render_projection_chart(session.result)
        st.button("Reset calculator", on_click=_reset_calculator)

    _render_split_chart(
        session.inputs.item_price,
        session.inputs.commission_percentage,
        force_dark_toggle,
    )
    _render_how_to_use()


if __name__ == "__main__":
    main()
