"""
Streamlit Frontend for the Expense Tracker

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Every figure is recomputed from the current expense list
3. Clear validation messages next to the form
4. Nothing is deleted without an explicit click

Pages:
- Dashboard: summary cards, category breakdown, monthly trend, recent expenses
- Expenses: filter, sort, select, bulk delete, CSV download
- Add Expense: the expense form (also used for editing)
"""

from datetime import date, datetime
from typing import Optional

import streamlit as st

from expense_tracker.analytics import parse_expense_date
from expense_tracker.audit import configure_logging, create_correlation_id
from expense_tracker.config import get_settings, validate_all_settings
from expense_tracker.models.expense import (
    CATEGORY_ICONS,
    Category,
    Expense,
    ExpenseFormData,
    FilterCriteria,
    SortOrder,
)
from expense_tracker.orchestrator import (
    ExpenseService,
    ExpenseValidationError,
    create_app_components,
)
from expense_tracker.services.storage import StorageError
from expense_tracker.utils.formatters import (
    format_currency,
    format_date,
    format_month_year,
)


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💶",
    layout="wide",
    initial_sidebar_state="expanded",
)

SORT_LABELS = {
    SortOrder.DATE_DESC: "Newest first",
    SortOrder.DATE_ASC: "Oldest first",
    SortOrder.AMOUNT_DESC: "Highest amount",
    SortOrder.AMOUNT_ASC: "Lowest amount",
}

PAGES = ["📊 Dashboard", "📋 Expenses", "➕ Add Expense", "⚙️ Settings"]


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    configure_logging(get_settings().app.log_level)
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Failed to initialize storage: {e}")
        return create_app_components(use_storage=False)


def money(amount) -> str:
    return format_currency(amount, get_settings().app.currency_code)


def category_label(category: Optional[Category]) -> str:
    if category is None:
        return "All Categories"
    return f"{CATEGORY_ICONS[category]} {category.value}"


def main():
    """Main application entry point."""
    service, _ = get_components()

    st.sidebar.title("💶 Expense Tracker")
    st.sidebar.markdown("---")

    if "page" not in st.session_state:
        st.session_state.page = PAGES[0]
    # Widget state can only be set before the radio is drawn
    if "nav_target" in st.session_state:
        st.session_state.page = st.session_state.pop("nav_target")

    page = st.sidebar.radio("Navigate to:", PAGES, key="page")

    if page == "📊 Dashboard":
        render_dashboard_page(service)
    elif page == "📋 Expenses":
        render_expenses_page(service)
    elif page == "➕ Add Expense":
        render_form_page(service)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_dashboard_page(service: ExpenseService):
    """Render the spending overview."""
    st.title("📊 Dashboard")

    summary = service.get_summary()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Spending", money(summary.total),
                help=f"{summary.expense_count} expenses")
    col2.metric("This Month", money(summary.monthly_total))
    col3.metric(
        "Top Category",
        category_label(summary.top_category) if summary.top_category else "—",
        help=(
            money(summary.by_category[summary.top_category])
            if summary.top_category else "No expenses yet"
        ),
    )
    col4.metric("Avg. Per Expense", money(summary.average_amount))

    st.markdown("---")

    left, right = st.columns(2)

    with left:
        st.subheader("By Category")
        spent = {c: a for c, a in summary.by_category.items() if a > 0}
        if spent:
            st.bar_chart(
                {
                    "Category": [c.value for c in spent],
                    "Amount": [float(a) for a in spent.values()],
                },
                x="Category",
                y="Amount",
            )
        else:
            st.info("No spending recorded yet.")

    with right:
        st.subheader("Monthly Trend")
        st.bar_chart(
            {
                "Month": [format_month_year(m.month) for m in summary.monthly_data],
                "Amount": [float(m.total) for m in summary.monthly_data],
            },
            x="Month",
            y="Amount",
        )

    st.subheader("Recent Expenses")
    if not summary.recent_expenses:
        st.info("Add your first expense to see it here.")
    for expense in summary.recent_expenses:
        render_expense_row(expense)


def render_expense_row(expense: Expense):
    col1, col2, col3, col4 = st.columns([2, 4, 2, 2])
    col1.write(format_date(expense.date))
    col2.write(expense.description)
    col3.write(category_label(expense.category))
    col4.write(f"**{money(expense.amount)}**")


FILTER_KEYS = ("filter_search", "filter_category", "filter_from", "filter_to")


def clear_filters():
    """Reset the filter widgets to their defaults; the sort order is kept."""
    for key in FILTER_KEYS:
        st.session_state.pop(key, None)


def set_selection(expense_ids: list[str]):
    """Tick or untick every row to match the select-all toggle."""
    checked = st.session_state.get("select_all", False)
    for expense_id in expense_ids:
        st.session_state[f"select_{expense_id}"] = checked


def render_filter_bar() -> tuple[FilterCriteria, SortOrder]:
    """Filter controls above the list; returns the chosen criteria and order."""
    col1, col2, col3, col4, col5 = st.columns([3, 2, 2, 2, 2])

    with col1:
        search = st.text_input(
            "Search", placeholder="Description or category", key="filter_search"
        )
    with col2:
        category = st.selectbox(
            "Category",
            options=[None] + list(Category),
            format_func=category_label,
            key="filter_category",
        )
    with col3:
        date_from: Optional[date] = st.date_input("From", value=None, key="filter_from")
    with col4:
        date_to: Optional[date] = st.date_input("To", value=None, key="filter_to")
    with col5:
        order = st.selectbox(
            "Sort by",
            options=list(SortOrder),
            format_func=lambda o: SORT_LABELS[o],
            key="filter_sort",
        )

    criteria = FilterCriteria(
        search=search,
        category=category,
        date_from=date_from.isoformat() if date_from else None,
        date_to=date_to.isoformat() if date_to else None,
    )
    if criteria.is_active:
        st.button("✖️ Clear filters", key="clear_filters", on_click=clear_filters)
    return criteria, order


def render_expenses_page(service: ExpenseService):
    """Render the filterable expense list."""
    st.title("📋 Expenses")

    criteria, order = render_filter_bar()
    expenses = service.query(criteria, order)

    st.markdown("---")

    if not expenses:
        if criteria.is_active:
            st.info("No expenses match your filters. Try adjusting them.")
        else:
            st.info("No expenses yet. Use 'Add Expense' to record one.")
        return

    st.markdown(
        f"Showing {len(expenses)} expenses · Total: "
        f"**{money(service.filtered_total(expenses))}**"
    )

    st.checkbox(
        "Select all",
        key="select_all",
        on_change=set_selection,
        args=([e.id for e in expenses],),
    )

    selected = []
    for expense in expenses:
        col0, col1, col2, col3, col4, col5 = st.columns([1, 2, 4, 2, 2, 1])
        if col0.checkbox("Select", key=f"select_{expense.id}", label_visibility="collapsed"):
            selected.append(expense.id)
        col1.write(format_date(expense.date))
        col2.write(expense.description)
        col3.write(category_label(expense.category))
        col4.write(f"**{money(expense.amount)}**")
        if col5.button("✏️", key=f"edit_{expense.id}", help="Edit"):
            st.session_state.editing_id = expense.id
            st.session_state.nav_target = "➕ Add Expense"
            st.rerun()

    st.markdown("---")
    col1, col2 = st.columns(2)

    with col1:
        label = f"⬇️ Export {len(selected)} selected" if selected else "⬇️ Export CSV"
        filename = get_settings().app.export_filename
        st.download_button(
            label,
            data=service.export_csv(criteria, order, selected, filename=filename),
            file_name=filename,
            mime="text/csv",
        )

    with col2:
        if selected and st.button(f"🗑️ Delete {len(selected)} selected", type="primary"):
            try:
                removed = service.delete_expenses(
                    selected, correlation_id=create_correlation_id()
                )
            except StorageError as e:
                st.error(f"Failed to delete: {e}")
            else:
                for expense_id in selected:
                    st.session_state.pop(f"select_{expense_id}", None)
                st.session_state.pop("select_all", None)
                st.success(f"Deleted {removed} expenses")
                st.rerun()


def render_form_page(service: ExpenseService):
    """Render the add/edit expense form."""
    editing_id = st.session_state.get("editing_id")
    existing = service.get_expense(editing_id) if editing_id else None

    st.title("✏️ Edit Expense" if existing else "➕ Add Expense")

    initial = ExpenseFormData.from_expense(existing) if existing else ExpenseFormData()
    today = datetime.now().date()
    parsed = parse_expense_date(initial.date) if existing else None
    initial_date = parsed if parsed and parsed <= today else today

    app_settings = get_settings().app

    with st.form("expense_form", clear_on_submit=existing is None):
        col1, col2 = st.columns(2)
        with col1:
            expense_date = st.date_input("Date *", value=initial_date, max_value=today)
            amount = st.text_input("Amount *", value=initial.amount, placeholder="0.00")
        with col2:
            category = st.selectbox(
                "Category *",
                options=list(Category),
                index=list(Category).index(initial.category),
                format_func=category_label,
            )
        description = st.text_area(
            "Description *",
            value=initial.description,
            max_chars=app_settings.description_max_length,
        )

        submitted = st.form_submit_button(
            "💾 Save Changes" if existing else "✅ Add Expense",
            type="primary",
        )

    if existing and st.button("Cancel"):
        st.session_state.editing_id = None
        st.rerun()

    if not submitted:
        return

    form = ExpenseFormData(
        date=expense_date.isoformat() if expense_date else "",
        amount=amount,
        category=category,
        description=description,
    )

    try:
        if existing:
            service.update_expense(existing.id, form, correlation_id=create_correlation_id())
            st.session_state.editing_id = None
            st.success("Expense updated")
        else:
            saved = service.add_expense(form, correlation_id=create_correlation_id())
            st.success(
                f"Added {money(saved.amount)} for {saved.category.value} "
                f"on {format_date(saved.date)}"
            )
    except ExpenseValidationError as e:
        for field, message in e.result.errors_by_field().items():
            st.error(f"{field.capitalize()}: {message}")
    except StorageError as e:
        st.error(f"Failed to save: {e}")


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()
    for name, key in [("Storage", "storage"), ("Application", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Invalid')}")

    if status.get("storage"):
        st.markdown(f"**Data file:** `{get_settings().storage.data_path}`")

    _, audit_logger = get_components()
    events = audit_logger.recent_events(limit=20)
    if events:
        st.markdown("### Recent Activity")
        for event in events:
            st.markdown(
                f"- `{event.timestamp:%Y-%m-%d %H:%M}` {event.description}"
            )

    st.markdown("---")
    st.markdown(
        "Configure the app with environment variables or a `.env` file "
        "(e.g. `EXPENSE_STORAGE_DATA_PATH`, `CURRENCY_CODE`, `LOG_LEVEL`)."
    )


if __name__ == "__main__":
    main()
